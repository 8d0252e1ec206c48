"""Tests for SegmentUtterancesUseCase — pure audio bookkeeping, no I/O."""

from __future__ import annotations

import numpy as np

from bolo.l2_use_cases.segment_utterances_use_case import SegmentUtterancesUseCase
from tests.conftest import silence_block, speech_block


def feed(seg: SegmentUtterancesUseCase, block: np.ndarray, step: float = 0.1) -> None:
    size = round(16000 * step)
    for i in range(0, len(block), size):
        seg.feed_audio(block[i : i + size])


class TestFinalize:
    def test_pause_after_speech_finalizes(self):
        seg = SegmentUtterancesUseCase(pause_duration=0.8)
        feed(seg, speech_block(1.0))
        assert not seg.should_finalize()

        feed(seg, silence_block(0.8))
        assert seg.should_finalize()

    def test_take_utterance_resets(self):
        seg = SegmentUtterancesUseCase(pause_duration=0.5, pre_roll=0.0)
        feed(seg, speech_block(1.0))
        feed(seg, silence_block(0.5))

        audio = seg.take_utterance()

        assert len(audio) == 24000
        assert not seg.in_utterance
        assert not seg.should_finalize()

    def test_max_utterance_forces_finalize(self):
        seg = SegmentUtterancesUseCase(max_utterance=2.0)
        feed(seg, speech_block(2.0))

        assert seg.should_finalize()

    def test_short_blip_is_discarded(self):
        seg = SegmentUtterancesUseCase(pause_duration=0.5, min_speech=0.3)
        feed(seg, speech_block(0.1))
        feed(seg, silence_block(0.6))

        assert not seg.should_finalize()
        assert not seg.in_utterance

    def test_pre_roll_kept_before_speech(self):
        seg = SegmentUtterancesUseCase(pause_duration=0.5, pre_roll=0.3)
        feed(seg, silence_block(2.0))
        feed(seg, speech_block(1.0))
        feed(seg, silence_block(0.5))

        audio = seg.take_utterance()

        assert len(audio) == 28800
        assert audio[0] == 0.0


class TestInterim:
    def test_interim_due_after_interval(self):
        seg = SegmentUtterancesUseCase(interim_interval=1.0)
        feed(seg, speech_block(0.9))
        assert not seg.should_emit_interim()

        feed(seg, speech_block(0.1))
        assert seg.should_emit_interim()

    def test_snapshot_restarts_interval(self):
        seg = SegmentUtterancesUseCase(interim_interval=1.0)
        feed(seg, speech_block(1.0))

        snap = seg.interim_snapshot()

        assert len(snap) > 0
        assert not seg.should_emit_interim()
        assert seg.in_utterance

    def test_no_interim_while_idle(self):
        seg = SegmentUtterancesUseCase(interim_interval=0.1)
        feed(seg, silence_block(2.0))

        assert not seg.should_emit_interim()


class TestNoSpeechTimeout:
    def test_silence_times_out(self):
        seg = SegmentUtterancesUseCase(no_speech_timeout=3.0)
        feed(seg, silence_block(2.9))
        assert not seg.no_speech_timed_out()

        feed(seg, silence_block(0.1))
        assert seg.no_speech_timed_out()

    def test_speech_resets_timeout(self):
        seg = SegmentUtterancesUseCase(no_speech_timeout=3.0, pause_duration=0.5)
        feed(seg, silence_block(2.5))
        feed(seg, speech_block(0.5))
        feed(seg, silence_block(0.5))
        seg.take_utterance()
        feed(seg, silence_block(2.0))

        assert not seg.no_speech_timed_out()

    def test_not_timed_out_mid_utterance(self):
        seg = SegmentUtterancesUseCase(no_speech_timeout=1.0, pause_duration=5.0)
        feed(seg, speech_block(0.5))
        feed(seg, silence_block(2.0))

        assert seg.in_utterance
        assert not seg.no_speech_timed_out()


class TestFlush:
    def test_flush_returns_pending_speech(self):
        seg = SegmentUtterancesUseCase()
        feed(seg, speech_block(0.5))

        audio = seg.flush()

        assert audio is not None
        assert not seg.in_utterance

    def test_flush_without_speech(self):
        seg = SegmentUtterancesUseCase()
        feed(seg, silence_block(1.0))

        assert seg.flush() is None

    def test_multichannel_block_is_flattened(self):
        seg = SegmentUtterancesUseCase()
        seg.feed_audio(np.full((8000, 1), 0.2, dtype=np.float32))

        assert seg.in_utterance
