"""Unit tests for UI state management."""

from unittest.mock import patch

from imaginator.core.editor import EditorPanel
from imaginator.core.faq import FaqAccordion
from imaginator.core.gallery import GalleryController
from imaginator.ui.models import UIState
from imaginator.ui.state import cleanup_ui_state, initialize_ui_state


class TestInitializeUIState:
    def test_creates_state_from_none(self, test_config):
        with patch("imaginator.ui.state.config", test_config):
            state = initialize_ui_state(None)

        assert isinstance(state, UIState)
        assert isinstance(state.gallery, GalleryController)
        assert isinstance(state.editor_panel, EditorPanel)
        assert isinstance(state.faq, FaqAccordion)
        assert state.is_initialized()

    def test_initialized_state_returned_unchanged(self, initialized_state):
        gallery = initialized_state.gallery
        state = initialize_ui_state(initialized_state)
        assert state is initialized_state
        assert state.gallery is gallery

    def test_only_missing_components_created(self, initialized_state, test_config):
        gallery = initialized_state.gallery
        initialized_state.faq = None

        with patch("imaginator.ui.state.config", test_config):
            state = initialize_ui_state(initialized_state)

        assert state.gallery is gallery
        assert isinstance(state.faq, FaqAccordion)

    def test_missing_api_key_still_initializes(self, test_config, caplog):
        test_config.api_key = ""
        with patch("imaginator.ui.state.config", test_config):
            state = initialize_ui_state(UIState())

        assert state.is_initialized()
        assert "IMAGINATOR_API_KEY is not set" in caplog.text


class TestCleanupUIState:
    def test_releases_components(self, initialized_state, generated_image):
        initialized_state.editor_panel.open(generated_image)
        panel = initialized_state.editor_panel
        initialized_state.download_paths["x"] = "/tmp/x.jpg"

        cleanup_ui_state(initialized_state)

        assert not panel.is_open
        assert initialized_state.gallery is None
        assert initialized_state.editor_panel is None
        assert initialized_state.faq is None
        assert initialized_state.download_paths == {}
