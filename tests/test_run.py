"""
Tests for the interactive carousel controls
===========================================
"""

from unittest.mock import patch

import numpy as np
import pytest

from gesture_carousel.cli.run import LOADING_DESCRIPTION_TEXT, CarouselApp
from gesture_carousel.config import Config
from gesture_carousel.drawing import draw_status

WINDOW_NAME = "Gesture Carousel"


@pytest.fixture
def config():
    return Config()


@pytest.fixture
def cv2():
    with patch("gesture_carousel.cli.run.cv2") as mocked:
        yield mocked


@pytest.fixture
def carousel_app(config):
    carousel_app = CarouselApp(config, window_name=WINDOW_NAME)
    carousel_app.last_frame = np.zeros((480, 640, 3), dtype=np.uint8)
    return carousel_app


class TestEditingBanner:
    """The window must show that tracking is paused while the terminal waits for input."""

    def test_banner_shown_before_prompt(self, carousel_app, cv2):
        seen_by_prompt = []

        def prompt(text, default=None):
            seen_by_prompt.append((cv2.imshow.call_count, carousel_app.session.suspended))
            return default

        with patch("gesture_carousel.cli.run.draw_status", wraps=draw_status) as drawn:
            with patch("gesture_carousel.cli.run.typer.prompt", side_effect=prompt):
                carousel_app.edit_selected()

        assert seen_by_prompt == [(1, True), (1, True)]
        assert drawn.call_args.kwargs["suspended"] is True
        window_name, frame = cv2.imshow.call_args.args
        assert window_name == WINDOW_NAME
        assert frame.any()
        # The banner is drawn on a copy
        assert not carousel_app.last_frame.any()
        cv2.waitKey.assert_called_once_with(1)
        assert not carousel_app.session.suspended

    def test_banner_shown_before_media_prompt(self, carousel_app, cv2, tmp_path):
        path = tmp_path / "holidays.mp4"
        path.write_bytes(b"video")

        def prompt(text, default=None):
            assert cv2.imshow.call_count == 1
            return str(path)

        with patch("gesture_carousel.cli.run.typer.prompt", side_effect=prompt):
            carousel_app.replace_selected_media()

        assert carousel_app.state.selected_item.title == "holidays"
        assert carousel_app.state.selected_item.is_video
        assert not carousel_app.session.suspended

    def test_no_window_yet(self, config, cv2):
        carousel_app = CarouselApp(config)
        with patch("gesture_carousel.cli.run.typer.prompt", side_effect=lambda text, default=None: default):
            carousel_app.edit_selected()
        cv2.imshow.assert_not_called()


class TestKeys:
    def test_navigation_and_quit(self, carousel_app):
        assert carousel_app.handle_key(ord("n"))
        assert carousel_app.state.selected_index == 1
        assert carousel_app.handle_key(ord("p"))
        assert carousel_app.handle_key(ord("p"))
        assert carousel_app.state.selected_index == 7
        assert carousel_app.handle_key(ord("h"))
        assert not carousel_app.show_help
        assert not carousel_app.handle_key(ord("q"))
        assert not carousel_app.handle_key(27)

    def test_describe_key(self, carousel_app):
        with patch("gesture_carousel.cli.run.describe_in_background") as describe:
            carousel_app.handle_key(ord("i"))
        assert carousel_app.descriptions == {1: LOADING_DESCRIPTION_TEXT}
        assert describe.call_args.args[1].id == 1


class TestAutoDescribe:
    def test_disabled_by_default(self, carousel_app):
        with patch("gesture_carousel.cli.run.describe_in_background") as describe:
            carousel_app.auto_describe()
        describe.assert_not_called()

    def test_describes_each_newly_selected_item_once(self, config):
        config.description.auto = True
        carousel_app = CarouselApp(config)
        with patch("gesture_carousel.cli.run.describe_in_background") as describe:
            carousel_app.auto_describe()
            carousel_app.auto_describe()
            carousel_app.session.controller.advance()
            carousel_app.auto_describe()
            carousel_app.session.controller.retreat()
            carousel_app.auto_describe()

        assert [call.args[1].id for call in describe.call_args_list] == [1, 2]

    def test_edited_item_described_again(self, config):
        config.description.auto = True
        carousel_app = CarouselApp(config)
        carousel_app.descriptions[1] = "Old text."
        with patch("gesture_carousel.cli.run.typer.prompt", side_effect=["Foggy Woods", "Calm"]):
            carousel_app.edit_selected()
        with patch("gesture_carousel.cli.run.describe_in_background") as describe:
            carousel_app.auto_describe()

        assert describe.call_args.args[1].title == "Foggy Woods"
