"""Tests for PipelineConfig class."""

import pytest

from imgpipe.pipeline_config import DEFAULT_CONCURRENCY, PipelineConfig, parse_flag


class TestParseFlag:
    """Tests for boolean flag parsing."""

    @pytest.mark.parametrize('value,expected', [
        ('1', True),
        ('true', True),
        ('TRUE', True),
        (' true ', True),
        ('0', False),
        ('false', False),
        ('yes', False),
        ('', False),
        (None, False),
    ])
    def test_parse_flag(self, value, expected):
        """Test only '1' and 'true' enable a flag."""
        assert parse_flag(value) is expected


class TestPipelineConfig:
    """Tests for PipelineConfig class."""

    def test_layout(self, project_root):
        """Test derived paths."""
        config = PipelineConfig(project_root=project_root)

        assert config.images_dir == project_root / 'Images'
        assert config.optimized_dir == project_root / 'Images' / 'optimized'
        assert config.manifest_path == project_root / 'Images' / 'image-manifest.json'
        assert config.cache_path == project_root / 'Images' / '.image-cache.json'
        assert config.local_url_prefix == 'Images/optimized'

    def test_defaults(self, project_root):
        """Test default values."""
        config = PipelineConfig(project_root=project_root)

        assert config.base_url is None
        assert config.remove_source is False
        assert config.manifest_copy_path is None
        assert config.concurrency == DEFAULT_CONCURRENCY
        assert config.validate() == []

    def test_base_url_trailing_slash_stripped(self, project_root):
        """Test trailing slashes are removed."""
        config = PipelineConfig(project_root=project_root, base_url='https://cdn.example.com/x/')

        assert config.base_url == 'https://cdn.example.com/x'

    def test_empty_base_url_is_none(self, project_root):
        """Test an empty base URL means local paths."""
        assert PipelineConfig(project_root=project_root, base_url='').base_url is None

    def test_from_env(self, project_root):
        """Test reading values from an explicit environment."""
        config = PipelineConfig.from_env(project_root, environ={
            'IMAGES_BASE_URL': 'https://cdn.example.com/assets/',
            'REMOVE_SOURCE_AFTER_OPTIMIZE': 'true',
            'REACT_MANIFEST_OUTPUT': '../web/src/image-manifest.json',
            'IMAGE_PIPELINE_CONCURRENCY': '8',
        })

        assert config.base_url == 'https://cdn.example.com/assets'
        assert config.remove_source is True
        assert config.manifest_copy_path == project_root / '..' / 'web' / 'src' / 'image-manifest.json'
        assert config.concurrency == 8
        assert config.validate() == []

    def test_from_env_empty(self, project_root):
        """Test an empty environment gives defaults."""
        config = PipelineConfig.from_env(project_root, environ={})

        assert config.base_url is None
        assert config.remove_source is False
        assert config.manifest_copy_path is None

    def test_from_env_reads_dotenv(self, project_root):
        """Test values are read from the project .env file."""
        (project_root / '.env').write_text(
            'IMAGES_BASE_URL=https://raw.example.com/repo/Images/optimized/\n'
            'REMOVE_SOURCE_AFTER_OPTIMIZE=1\n'
        )

        config = PipelineConfig.from_env(project_root, environ={})

        assert config.base_url == 'https://raw.example.com/repo/Images/optimized'
        assert config.remove_source is True

    def test_environment_overrides_dotenv(self, project_root):
        """Test process environment wins over .env."""
        (project_root / '.env').write_text('IMAGES_BASE_URL=https://from-file.example.com\n')

        config = PipelineConfig.from_env(project_root, environ={
            'IMAGES_BASE_URL': 'https://from-env.example.com',
        })

        assert config.base_url == 'https://from-env.example.com'

    def test_invalid_concurrency_reported(self, project_root):
        """Test a non-integer concurrency is a validation error."""
        config = PipelineConfig.from_env(project_root, environ={'IMAGE_PIPELINE_CONCURRENCY': 'many'})

        errors = config.validate()

        assert config.concurrency == DEFAULT_CONCURRENCY
        assert len(errors) == 1
        assert 'IMAGE_PIPELINE_CONCURRENCY' in errors[0]

    def test_validate_concurrency(self, project_root):
        """Test concurrency must be positive."""
        errors = PipelineConfig(project_root=project_root, concurrency=0).validate()

        assert any('Concurrency' in e for e in errors)

    def test_validate_base_url_scheme(self, project_root):
        """Test base URL must be http(s)."""
        errors = PipelineConfig(project_root=project_root, base_url='cdn.example.com').validate()

        assert any('IMAGES_BASE_URL' in e for e in errors)
