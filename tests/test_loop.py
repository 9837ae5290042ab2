"""Frame loop scheduling and teardown."""

import asyncio
import logging

import pytest

from vaultfall.game.loop import FrameLoop
from tests.conftest import make_inputs


def test_runs_frames_until_stopped(engine):
    frames = []

    async def scenario():
        loop = FrameLoop(engine, make_inputs, lambda: None, fps=500)

        def on_frame(resolution):
            frames.append(resolution)
            if len(frames) == 3:
                loop.stop()

        loop.on_frame = on_frame
        loop.start()
        assert loop.running
        await asyncio.wait_for(loop.wait_stopped(), timeout=5)
        return loop

    loop = asyncio.run(scenario())

    assert len(frames) == 3
    assert loop.frame_count == 3
    assert not loop.running
    assert not loop.pending
    assert engine.world.anim.frame == 3


def test_stop_cancels_pending_frame(engine):
    calls = []

    def read_inputs():
        calls.append(1)
        return make_inputs()

    async def scenario():
        loop = FrameLoop(engine, read_inputs, lambda: None, fps=100)
        loop.start()
        assert loop.pending
        loop.stop()
        assert not loop.pending
        await asyncio.sleep(0.05)
        return loop

    loop = asyncio.run(scenario())

    assert calls == []
    assert loop.frame_count == 0


def test_stop_is_idempotent(engine):
    async def scenario():
        loop = FrameLoop(engine, make_inputs, lambda: None)
        loop.stop()
        loop.start()
        loop.stop()
        loop.stop()
        await loop.wait_stopped()
        return loop

    assert not asyncio.run(scenario()).running


def test_double_start_warns(engine, caplog):
    async def scenario():
        loop = FrameLoop(engine, make_inputs, lambda: None)
        loop.start()
        with caplog.at_level(logging.WARNING):
            loop.start()
        loop.stop()

    asyncio.run(scenario())
    assert "already running" in caplog.text


def test_stop_during_input_skips_tick(engine):
    async def scenario():
        loop = FrameLoop(engine, None, lambda: None, fps=500)

        def read_inputs():
            loop.stop()
            return make_inputs()

        loop.read_inputs = read_inputs
        loop.start()
        await asyncio.wait_for(loop.wait_stopped(), timeout=5)
        return loop

    loop = asyncio.run(scenario())
    assert loop.frame_count == 0
    assert engine.world.anim.frame == 0


def test_failed_frame_is_skipped_and_loop_continues(engine, caplog):
    calls = []

    async def scenario():
        loop = FrameLoop(engine, None, lambda: None, fps=500)

        def read_inputs():
            calls.append(1)
            if len(calls) == 2:
                raise RuntimeError("input glitch")
            if len(calls) == 5:
                loop.stop()
            return make_inputs()

        loop.read_inputs = read_inputs
        loop.start()
        await asyncio.wait_for(loop.wait_stopped(), timeout=5)
        return loop

    with caplog.at_level(logging.ERROR):
        loop = asyncio.run(scenario())

    assert len(calls) == 5
    assert loop.frames_skipped == 1
    assert loop.frame_count == 3
    assert engine.world.anim.frame == 3
    assert not loop.running
    assert not loop.pending
    assert "input glitch" in caplog.text


def test_failing_frame_callback_does_not_halt(engine):
    presented = []

    async def scenario():
        loop = FrameLoop(engine, make_inputs, lambda: None, fps=500)

        def on_frame(resolution):
            presented.append(resolution)
            if len(presented) == 1:
                raise ValueError("blit failed")
            if len(presented) == 3:
                loop.stop()

        loop.on_frame = on_frame
        loop.start()
        await asyncio.wait_for(loop.wait_stopped(), timeout=5)
        return loop

    loop = asyncio.run(scenario())
    assert len(presented) == 3
    assert loop.frames_skipped == 1


def test_pace_runs_before_each_frame(engine):
    order = []

    async def scenario():
        loop = FrameLoop(engine, None, lambda: None, fps=1)

        def read_inputs():
            order.append("inputs")
            if order.count("inputs") == 3:
                loop.stop()
            return make_inputs()

        loop.read_inputs = read_inputs
        loop.pace = lambda: order.append("pace")
        loop.start()
        # fps=1 would take seconds on the timer; pacing drives the cadence
        await asyncio.wait_for(loop.wait_stopped(), timeout=0.5)
        return loop

    loop = asyncio.run(scenario())
    assert order == ["pace", "inputs"] * 3
    assert not loop.pending


def test_paced_loop_stop_cancels_pending_frame(engine):
    paced = []

    async def scenario():
        loop = FrameLoop(engine, make_inputs, lambda: None, pace=lambda: paced.append(1))
        loop.start()
        assert loop.pending
        loop.stop()
        await asyncio.sleep(0.01)

    asyncio.run(scenario())
    assert paced == []


def test_rejects_non_positive_fps(engine):
    with pytest.raises(ValueError):
        FrameLoop(engine, make_inputs, lambda: None, fps=0)
