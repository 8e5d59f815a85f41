"""Tests for codecrafter/preview.py."""

import html

from codecrafter.preview import PreviewRouter, STATIC_SANDBOX
from tests.conftest import RecordingRenderer

PAGE = "<html><body><script>alert(1)</script><p>\"quoted\"</p></body></html>"
JSX = "export default function App() { return <p>hi</p>; }"


class TestStrategySelection:

    def test_markup_targets_use_static(self):
        assert PreviewRouter.strategy_for("html-bootstrap") == "static"

    def test_component_targets_use_dynamic(self):
        assert PreviewRouter.strategy_for("next-js") == "dynamic"

    def test_unknown_target_defaults_to_static(self):
        assert PreviewRouter.strategy_for("whatever") == "static"


class TestStaticStrategy:

    def test_code_embedded_in_sandboxed_iframe(self, renderer):
        router = PreviewRouter(renderer)
        surface = router.render(PAGE, "html-css", 0)

        assert surface.strategy == "static"
        assert f'sandbox="{STATIC_SANDBOX}"' in surface.html
        assert html.escape(PAGE, quote=True) in surface.html
        assert "<script>alert(1)</script>" not in surface.html
        assert renderer.events == []

    def test_epoch_changes_document(self, renderer):
        router = PreviewRouter(renderer)
        first = router.render(PAGE, "html-css", 0)
        second = router.render(PAGE, "html-css", 1)
        assert first.html != second.html
        assert first.key != second.key


class TestDynamicStrategy:

    def test_delegates_to_live_renderer(self, renderer):
        router = PreviewRouter(renderer)
        surface = router.render(JSX, "react-js", 0)

        assert surface.strategy == "dynamic"
        assert renderer.mounts == [("mount", "react-js", 0)]

    def test_rerender_same_code_and_epoch_does_not_remount(self, renderer):
        router = PreviewRouter(renderer)
        router.render(JSX, "react-js", 0)
        router.render(JSX, "react-js", 0)
        assert len(renderer.mounts) == 1

    def test_epoch_bump_unmounts_then_mounts_fresh(self, renderer):
        router = PreviewRouter(renderer)
        router.render(JSX, "react-js", 0)
        router.render(JSX, "react-js", 1)

        assert renderer.events == [
            ("mount", "react-js", 0),
            ("unmount", "react-js:0"),
            ("mount", "react-js", 1),
        ]

    def test_switching_to_static_disposes_live_surface(self, renderer):
        router = PreviewRouter(renderer)
        router.render(JSX, "react-js", 0)
        router.render(PAGE, "html-css", 0)

        assert renderer.events[-1] == ("unmount", "react-js:0")
        assert router.current_key == ("static", "html-css", 0)

    def test_mount_failure_is_contained(self):
        router = PreviewRouter(RecordingRenderer(fail=True))
        surface = router.render(JSX, "react-js", 0)

        assert surface.is_blank
        assert "renderer exploded" in surface.error
        assert router.current_key is None


class TestPlaceholderAndFullscreen:

    def test_empty_code_is_not_mounted(self, renderer):
        router = PreviewRouter(renderer)
        surface = router.render("", "react-js", 0)
        assert surface.is_blank
        assert renderer.events == []

    def test_fullscreen_is_static_for_any_framework(self, renderer):
        router = PreviewRouter(renderer)
        router.render(JSX, "react-js", 0)
        surface = router.fullscreen(JSX)

        assert surface.strategy == "static"
        assert f'sandbox="{STATIC_SANDBOX}"' in surface.html
        assert router.current_key == ("dynamic", "react-js", 0)
        assert len(renderer.mounts) == 1

    def test_dispose_is_idempotent(self, renderer):
        router = PreviewRouter(renderer)
        router.render(JSX, "react-js", 0)
        router.dispose()
        router.dispose()
        assert renderer.events.count(("unmount", "react-js:0")) == 1
