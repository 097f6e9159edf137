import pytest

from javaupdater.javaupdater_logger import JavaUpdaterLogger


@pytest.fixture
def logger():
    return JavaUpdaterLogger()


@pytest.fixture
def install_dir(tmp_path):
    path = tmp_path / "jdk" / "linux"
    path.mkdir(parents=True)
    return path
