from pathlib import Path

def test_repo_layout_has_main_and_config():
    repo_root = Path(__file__).resolve().parents[1]
    assert (repo_root / "glfsearch" / "main.py").exists()
    assert (repo_root / "config" / "general.yaml").exists()
