import pytest
from warden import Store


@pytest.fixture
def store() -> Store:
    return Store()


@pytest.fixture
def project_root(tmp_path, monkeypatch):
    # Use a fixture to ensure a clean project directory and chdir for each test
    (tmp_path / "pyproject.toml").write_text("[project]\nname = 'sample'\n")
    monkeypatch.chdir(tmp_path)
    return tmp_path
