import pytest

from testsuites.ui_testing.framework.conditions import ElementPresent
from testsuites.ui_testing.framework.flow import Flow, FlowFailedError, FlowState, FlowStateError
from testsuites.ui_testing.framework.locator import Locator
from testsuites.ui_testing.framework.results import InteractionResult

REMOVE = Locator.xpath("//button[text()='Remove']", name="'Remove' for 'Sauce Labs Backpack'")


def test_confirmed_flow():
    flow = Flow("add_item_to_cart[Sauce Labs Backpack]")
    assert flow.state is FlowState.NOT_STARTED
    assert flow.elapsed_ms == 0.0

    flow.start()
    assert flow.state is FlowState.IN_PROGRESS

    flow.confirm(InteractionResult.success(), value="Sauce Labs Backpack")
    assert flow.confirmed
    assert flow.value == "Sauce Labs Backpack"
    assert flow.raise_for_state() is flow


def test_failed_flow_keeps_its_cause():
    cause = InteractionResult.timeout(
        locator=REMOVE, condition=ElementPresent(REMOVE), elapsed_ms=10000
    )
    flow = Flow("add_item_to_cart[Sauce Labs Backpack]").start()

    flow.fail(cause, "Epic sadface: something")

    assert flow.failed
    assert flow.result is cause
    with pytest.raises(FlowFailedError) as excinfo:
        flow.raise_for_state()
    message = str(excinfo.value)
    assert "add_item_to_cart[Sauce Labs Backpack]" in message
    assert "TIMEOUT" in message
    assert "'Remove' for 'Sauce Labs Backpack'" in message
    assert "Epic sadface" in message
    assert excinfo.value.flow is flow


@pytest.mark.parametrize(
    "move",
    [
        lambda f: f.confirm(InteractionResult.success()),
        lambda f: f.fail(InteractionResult.not_found()),
    ],
)
def test_cannot_finish_before_start(move):
    with pytest.raises(FlowStateError):
        move(Flow("login"))


def test_terminal_states_are_final():
    flow = Flow("login").start().fail(InteractionResult.not_found())

    with pytest.raises(FlowStateError):
        flow.confirm(InteractionResult.success())
    with pytest.raises(FlowStateError):
        flow.start()
    assert flow.failed


def test_not_started_flow_does_not_pass():
    with pytest.raises(FlowFailedError):
        Flow("open_cart").raise_for_state()
