
import pytest


def test_ui_imports():
    """
    Smoke test to verify that UI modules can be imported without error.
    This ensures no syntax errors or missing dependencies in the new structure.
    """
    try:
        import glfsearch.ui.config_loader
        import glfsearch.ui.state
        import glfsearch.ui.components.project_list
        import glfsearch.ui.components.detail_panel
        import glfsearch.ui.components.navigation
        import glfsearch.ui.pages.home
        import glfsearch.ui.pages.search
        import glfsearch.run_streamlit
        import glfsearch.cli
        import glfsearch.main
    except Exception as e:
        pytest.fail(f"Import failed: {e}")

    assert True
