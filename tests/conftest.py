"""Test fixtures: scripted generation service, recording notifier and renderer."""

from typing import Any, List

import pytest

from codecrafter import frameworks
from codecrafter.llm.generation_client import GenerationClient
from codecrafter.schemas import GenerationRequest


class OverloadError(Exception):
    """Mimics a provider error whose message carries the overload status."""

    def __init__(self):
        super().__init__("503 Service Unavailable: The model is overloaded. Please try again later.")


class ScriptedService:
    """Generation service that replays a list of outcomes, one per call."""

    def __init__(self, outcomes: List[Any]):
        self.outcomes = list(outcomes)
        self.prompts: List[str] = []

    def complete(self, prompt: str):
        self.prompts.append(prompt)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    @property
    def calls(self) -> int:
        return len(self.prompts)


class RecordingNotifier:
    def __init__(self):
        self.messages = []

    def notify(self, severity, message):
        self.messages.append((severity, message))

    def of(self, severity):
        return [message for sev, message in self.messages if sev == severity]


class RecordingRenderer:
    """Live renderer that records mount/unmount calls."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.events = []

    def mount(self, code, framework_id, epoch):
        self.events.append(("mount", framework_id, epoch))
        if self.fail:
            raise RuntimeError("renderer exploded")
        return f"<div data-epoch='{epoch}'>{code}</div>"

    def unmount(self, token):
        self.events.append(("unmount", token))

    @property
    def mounts(self):
        return [event for event in self.events if event[0] == "mount"]


@pytest.fixture
def sleeps():
    """Records backoff delays instead of sleeping."""
    return []


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def make_client(sleeps, notifier):
    def _make(outcomes, max_attempts=3, base_delay=2.0):
        service = ScriptedService(outcomes)
        client = GenerationClient(
            service=service,
            max_attempts=max_attempts,
            base_delay=base_delay,
            sleep=sleeps.append,
            notifier=notifier,
        )
        return client, service
    return _make


@pytest.fixture
def react_request():
    return GenerationRequest(
        user_description="  a pricing card with three tiers  ",
        framework=frameworks.lookup("react-js"),
    )


@pytest.fixture
def renderer():
    return RecordingRenderer()
