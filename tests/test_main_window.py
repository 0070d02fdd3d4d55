"""Smoke tests for the main window wiring."""

import pytest

from enclosure_layout.main_window import APP_NAME, MainWindow


@pytest.fixture
def window(qapp):
    w = MainWindow()
    yield w
    w._document.mark_clean()
    w.deleteLater()


def test_starts_untitled_and_clean(window):
    assert window.windowTitle() == f"Untitled - {APP_NAME}"
    assert window._table_model.rowCount() == 0


def test_adding_component_updates_table_and_title(window):
    index = window._component_combo.findData("footswitch")
    window._on_add_component(index)

    assert window._table_model.rowCount() == 1
    assert window._canvas.selected_component_id is not None
    assert window.windowTitle().startswith("Untitled*")
    assert window._delete_btn.isEnabled()


def test_enclosure_combo_changes_document(window):
    index = window._enclosure_combo.findData("TAY-1590BB")
    window._enclosure_combo.setCurrentIndex(index)
    assert window._document.enclosure_type == "TAY-1590BB"


def test_save_to_clears_dirty_marker(window, tmp_path):
    window._on_add_component(window._component_combo.findData("pot-16mm"))
    path = tmp_path / "pedal.enclosure"

    assert window._save_to(path)
    assert window.windowTitle() == f"pedal.enclosure - {APP_NAME}"
    assert path.exists()


def test_table_lists_components(window):
    window._on_add_component(window._component_combo.findData("pot-16mm"))
    window._on_add_component(window._component_combo.findData("spst-toggle"))

    model = window._table_model
    names = {model.index(row, 0).data() for row in range(model.rowCount())}
    assert names == {"16mm Potentiometer", "SPST Toggle"}
