import asyncio
import socket

import pytest

from api.main import create_app
from lifecycle.api_server_wrapper import APIServerWrapper


def free_port():
    with socket.socket() as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


async def wait_until_serving(wrapper, timeout=5.0):
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while loop.time() < deadline:
        if wrapper._server is not None and wrapper._server.started:
            return
        await asyncio.sleep(0.05)
    raise AssertionError("API server did not start")


@pytest.mark.asyncio
async def test_start_and_stop_releases_port():
    port = free_port()
    wrapper = APIServerWrapper(create_app(), host="127.0.0.1", port=port)

    task = asyncio.create_task(wrapper.start())
    await wait_until_serving(wrapper)
    assert wrapper.is_running

    await wrapper.stop()
    await asyncio.wait_for(task, timeout=5.0)

    assert not wrapper.is_running
    with socket.socket() as s:
        s.bind(("127.0.0.1", port))


@pytest.mark.asyncio
async def test_stop_without_start():
    wrapper = APIServerWrapper(create_app(), host="127.0.0.1", port=free_port())

    await wrapper.stop()

    assert not wrapper.is_running


def test_url_points_at_clock_endpoint():
    wrapper = APIServerWrapper(create_app(), host="127.0.0.1", port=8123)
    assert wrapper.url == "http://127.0.0.1:8123/api/v1/clock"
