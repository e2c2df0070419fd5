"""Tests for Scanner class."""

import pytest

from imgpipe.scanner import Scanner


class TestScanner:
    """Tests for Scanner class."""

    def test_init_defaults(self, logger):
        """Test default extension and exclusion sets."""
        scanner = Scanner(logger=logger)

        assert scanner.extensions == {'.jpg', '.jpeg', '.png', '.webp'}
        assert scanner.exclude_dirs == {'optimized'}

    def test_missing_root_returns_empty(self, tmp_path, logger):
        """Test a nonexistent root is not an error."""
        scanner = Scanner(logger=logger)

        assert scanner.scan(tmp_path / 'nope') == []

    def test_empty_root(self, images_dir, logger):
        """Test an empty root yields nothing."""
        assert Scanner(logger=logger).scan(images_dir) == []

    def test_recurses_and_filters(self, images_dir, make_image, logger):
        """Test nested images are found and other files ignored."""
        make_image('top.jpg')
        make_image('a/b/deep.png')
        make_image('a/pic.webp')
        (images_dir / 'notes.txt').write_text('hello')
        (images_dir / 'a' / 'anim.gif').write_bytes(b'GIF89a')

        found = Scanner(logger=logger).scan(images_dir)
        names = sorted(p.relative_to(images_dir).as_posix() for p in found)

        assert names == ['a/b/deep.png', 'a/pic.webp', 'top.jpg']
        assert all(p.is_absolute() for p in found)

    def test_extension_case_insensitive(self, images_dir, logger):
        """Test upper-case extensions match."""
        (images_dir / 'SHOUT.JPG').write_bytes(b'x')
        (images_dir / 'Mixed.JpEg').write_bytes(b'x')

        found = Scanner(logger=logger).scan(images_dir)

        assert sorted(p.name for p in found) == ['Mixed.JpEg', 'SHOUT.JPG']

    def test_excludes_optimized_at_any_depth(self, images_dir, make_image, logger):
        """Test directories named 'optimized' are never entered."""
        make_image('keep.png')
        make_image('optimized/out.webp')
        make_image('sub/optimized/nested.webp')
        make_image('sub/kept.jpg')

        found = Scanner(logger=logger).scan(images_dir)

        assert sorted(p.name for p in found) == ['keep.png', 'kept.jpg']

    def test_custom_sets(self, images_dir, make_image, logger):
        """Test overriding extensions and exclusions."""
        make_image('a.png')
        make_image('b.jpg')
        make_image('skip/c.png')

        scanner = Scanner(extensions=['.PNG'], exclude_dirs=['skip'], logger=logger)
        found = scanner.scan(images_dir)

        assert [p.name for p in found] == ['a.png']

    def test_deep_tree_without_recursion_limit(self, images_dir, logger):
        """Test very deep trees are walked iteratively."""
        path = images_dir
        for i in range(60):
            path = path / f'd{i}'
        path.mkdir(parents=True)
        (path / 'leaf.png').write_bytes(b'x')

        found = Scanner(logger=logger).scan(images_dir)

        assert [p.name for p in found] == ['leaf.png']

    @pytest.mark.parametrize('filename,expected', [
        ('a.jpg', True),
        ('a.JPEG', True),
        ('a.webp', True),
        ('a.gif', False),
        ('jpg', False),
    ])
    def test_is_supported(self, filename, expected):
        """Test extension filter."""
        assert Scanner().is_supported(filename) is expected
