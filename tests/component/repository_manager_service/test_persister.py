import os
import json
import stat
import pytest
import yaml

from services.repository_manager_service import (
    RepositoryManager,
    RepositoryEntry,
    Configuration,
    FilePersister,
    MissingConfigError,
)
from services.repository_manager_service.config.env_settings import ManagerSettings

# Test fixtures
@pytest.fixture
def yaml_config_file(tmp_path):
    """Create a YAML repository configuration file."""
    config_path = tmp_path / "repositories.yaml"
    config_content = {
        "name": "acme/registry",
        "homepage": "https://packages.example.com",
        "require-all": True,
        "repositories": [
            {"id": "r1", "type": "vcs", "url": "https://example.com/a"},
            {"id": "p1", "type": "package", "package": {"name": "acme/p", "version": "1.0.0"}},
        ],
    }
    with open(config_path, "w") as f:
        yaml.dump(config_content, f, sort_keys=False)
    return config_path

def test_load_yaml_config(yaml_config_file):
    """Test loading a YAML document."""
    config = FilePersister(yaml_config_file).load()

    assert config.name == "acme/registry"
    assert list(config.repositories) == ["r1", "p1"]
    assert config.repositories["r1"].url == "https://example.com/a"
    assert config.repositories["p1"].package["version"] == "1.0.0"

def test_load_missing_file(tmp_path):
    """Test that a missing file is reported as a missing configuration."""
    with pytest.raises(MissingConfigError):
        FilePersister(tmp_path / "nonexistent.yaml").load()

@pytest.mark.parametrize("content", ["", "   \n", "~\n", "{}\n"])
def test_load_empty_file(tmp_path, content):
    """Test that an empty document is reported as a missing configuration."""
    config_path = tmp_path / "repositories.yaml"
    config_path.write_text(content)

    with pytest.raises(MissingConfigError):
        FilePersister(config_path).load()

def test_load_invalid_yaml(tmp_path):
    config_path = tmp_path / "repositories.yaml"
    config_path.write_text("repositories: [unclosed\n")

    with pytest.raises(yaml.YAMLError):
        FilePersister(config_path).load()

def test_load_non_mapping_document(tmp_path):
    config_path = tmp_path / "repositories.yaml"
    config_path.write_text("- just\n- a list\n")

    with pytest.raises(ValueError):
        FilePersister(config_path).load()

def test_flush_round_trip_keeps_order_and_extra_keys(yaml_config_file):
    """Test that flushing writes back repositories in order with unknown keys intact."""
    persister = FilePersister(yaml_config_file)
    config = persister.load()
    config.repositories["r0"] = RepositoryEntry(id="r0", type="git", url="https://example.com/z")
    persister.flush(config)

    with open(yaml_config_file) as f:
        saved = yaml.safe_load(f)

    assert saved["require-all"] is True
    assert [repository["id"] for repository in saved["repositories"]] == ["r1", "p1", "r0"]
    assert "package" not in saved["repositories"][0]
    assert "url" not in saved["repositories"][1]

def test_flush_json(tmp_path):
    """Test that a '.json' path is written as JSON."""
    config_path = tmp_path / "nested" / "satis.json"
    config = Configuration(
        name="acme/registry",
        repositories={
            "r1": RepositoryEntry(id="r1", type="vcs", url="https://example.com/a", installation_source="dist"),
        },
    )
    FilePersister(config_path).flush(config)

    with open(config_path) as f:
        saved = json.load(f)

    assert saved == {
        "name": "acme/registry",
        "repositories": [
            {"id": "r1", "type": "vcs", "url": "https://example.com/a", "installation-source": "dist"},
        ],
    }
    assert FilePersister(config_path).load() == config

def test_flush_leaves_no_temporary_files(tmp_path):
    config_path = tmp_path / "repositories.yaml"
    FilePersister(config_path).flush(Configuration())

    assert [path.name for path in tmp_path.iterdir()] == ["repositories.yaml"]

def test_flush_error_propagates(tmp_path):
    """Test that write errors reach the caller."""
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")

    with pytest.raises(OSError):
        FilePersister(blocker / "repositories.yaml").flush(Configuration())

def test_manager_with_file_persister(tmp_path):
    """Test the manager against a real file, starting from no document."""
    config_path = tmp_path / "repositories.yaml"
    settings = ManagerSettings(REPOSITORY_CONFIG_PATH=str(config_path), LOCK_TIMEOUT=1.0)
    manager = RepositoryManager.from_settings(settings)

    manager.add(RepositoryEntry(id="r1", type="vcs", url="https://example.com/a"))

    reloaded = FilePersister(config_path).load()
    assert list(reloaded.repositories) == ["r1"]
    assert reloaded.repositories["r1"] == manager.find_one_repository("r1")

def test_flush_keeps_existing_file_mode(yaml_config_file):
    """Test that replacing the document keeps its permissions."""
    os.chmod(yaml_config_file, 0o644)
    FilePersister(yaml_config_file).flush(Configuration())

    assert stat.S_IMODE(os.stat(yaml_config_file).st_mode) == 0o644

def test_flush_new_file_follows_umask(tmp_path):
    config_path = tmp_path / "repositories.yaml"
    previous = os.umask(0o022)
    try:
        FilePersister(config_path).flush(Configuration())
    finally:
        os.umask(previous)

    assert stat.S_IMODE(os.stat(config_path).st_mode) == 0o644
