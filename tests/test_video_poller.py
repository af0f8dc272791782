import asyncio

import pytest

from osrs_oracle.domain.errors import NetworkFailure, OperationCancelled, OperationTimeout
from osrs_oracle.domain.models import MediaOperation, OperationStatus
from osrs_oracle.services.video_poller import PollerState, VideoOperationPoller

HANDLE = "models/veo/operations/42"
DONE_WITH_VIDEO = {
    "name": HANDLE,
    "done": True,
    "response": {"generateVideoResponse": {"generatedSamples": [{"video": {"uri": "https://files/v"}}]}},
}


class ScriptedClient:
    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    async def get_operation(self, handle):
        self.calls.append(handle)
        return self.responses.pop(0)


@pytest.mark.asyncio
async def test_two_pending_then_done_makes_three_status_calls():
    client = ScriptedClient([{"name": HANDLE}, {"name": HANDLE}, DONE_WITH_VIDEO])
    poller = VideoOperationPoller(client, interval_s=0)
    assert poller.state is PollerState.SUBMITTED

    op = await poller.run(MediaOperation(handle=HANDLE))

    assert len(client.calls) == 3
    assert client.calls == [HANDLE] * 3
    assert poller.state is PollerState.COMPLETE
    assert op.status is OperationStatus.DONE
    assert op.result_uri == "https://files/v"


@pytest.mark.asyncio
async def test_done_without_result_ends_failed_without_raising():
    client = ScriptedClient([{"name": HANDLE, "done": True, "response": {}}])
    poller = VideoOperationPoller(client, interval_s=0)
    op = await poller.run(MediaOperation(handle=HANDLE))
    assert poller.state is PollerState.FAILED
    assert op.status is OperationStatus.FAILED
    assert op.result_uri is None


@pytest.mark.asyncio
async def test_already_finished_operation_is_not_polled():
    client = ScriptedClient([])
    poller = VideoOperationPoller(client, interval_s=0)
    op = await poller.run(MediaOperation(handle=HANDLE, status=OperationStatus.DONE, result_uri="https://v"))
    assert client.calls == []
    assert op.result_uri == "https://v"
    assert poller.state is PollerState.COMPLETE


@pytest.mark.asyncio
async def test_status_without_name_keeps_handle():
    client = ScriptedClient([{}, {"done": True, "response": {"generatedVideos": [{"video": {"uri": "u"}}]}}])
    op = await VideoOperationPoller(client, interval_s=0).run(MediaOperation(handle=HANDLE))
    assert client.calls == [HANDLE, HANDLE]
    assert op.handle == HANDLE


@pytest.mark.asyncio
async def test_poll_cap_raises_timeout():
    client = ScriptedClient([{"name": HANDLE}] * 5)
    poller = VideoOperationPoller(client, interval_s=0, max_polls=2)
    with pytest.raises(OperationTimeout):
        await poller.run(MediaOperation(handle=HANDLE))
    assert len(client.calls) == 2
    assert poller.state is PollerState.FAILED


@pytest.mark.asyncio
async def test_deadline_raises_timeout():
    client = ScriptedClient([{"name": HANDLE}] * 5)
    poller = VideoOperationPoller(client, interval_s=0, deadline_s=0)
    with pytest.raises(OperationTimeout):
        await poller.run(MediaOperation(handle=HANDLE))
    assert client.calls == []


@pytest.mark.asyncio
async def test_cancel_event_stops_loop_during_wait():
    client = ScriptedClient([{"name": HANDLE}] * 5)
    cancel = asyncio.Event()
    poller = VideoOperationPoller(client, interval_s=30, cancel_event=cancel)

    task = asyncio.create_task(poller.run(MediaOperation(handle=HANDLE)))
    await asyncio.sleep(0)
    cancel.set()
    with pytest.raises(OperationCancelled):
        await asyncio.wait_for(task, timeout=1)
    assert client.calls == []
    assert poller.state is PollerState.FAILED


@pytest.mark.asyncio
async def test_network_failure_propagates():
    class BrokenClient:
        async def get_operation(self, handle):
            raise NetworkFailure("down")

    poller = VideoOperationPoller(BrokenClient(), interval_s=0)
    with pytest.raises(NetworkFailure):
        await poller.run(MediaOperation(handle=HANDLE))
