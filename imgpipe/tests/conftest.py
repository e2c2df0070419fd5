"""
Pytest fixtures for imgpipe tests.
"""

import logging

import pytest


FORMATS = {
    '.jpg': 'JPEG',
    '.jpeg': 'JPEG',
    '.png': 'PNG',
    '.webp': 'WEBP',
}


@pytest.fixture
def project_root(tmp_path):
    """Fixture providing an empty project directory."""
    root = tmp_path / 'project'
    root.mkdir()
    return root


@pytest.fixture
def images_dir(project_root):
    """Fixture providing the Images scan root inside the project."""
    path = project_root / 'Images'
    path.mkdir()
    return path


@pytest.fixture
def make_image(images_dir):
    """Fixture returning a factory that writes a real image under Images/."""
    from PIL import Image

    def _make(relative, size=(40, 30), color='red', mode='RGB'):
        path = images_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        img = Image.new(mode, size, color=color)
        img.save(path, format=FORMATS[path.suffix.lower()])
        return path

    return _make


@pytest.fixture
def config(project_root):
    """Fixture providing a local-path pipeline configuration."""
    from imgpipe.pipeline_config import PipelineConfig

    return PipelineConfig(project_root=project_root, concurrency=2)


@pytest.fixture
def cdn_config(project_root):
    """Fixture providing a configuration with a CDN base URL."""
    from imgpipe.pipeline_config import PipelineConfig

    return PipelineConfig(
        project_root=project_root,
        base_url='https://cdn.example.com/assets/',
        concurrency=2,
    )


@pytest.fixture
def sample_image_bytes():
    """Fixture providing sample JPEG image bytes."""
    from PIL import Image
    import io

    img = Image.new('RGB', (100, 100), color='red')
    buffer = io.BytesIO()
    img.save(buffer, format='JPEG')
    return buffer.getvalue()


@pytest.fixture
def logger():
    """Fixture providing a logger."""
    return logging.getLogger('test')
