"""Tests for WhisperTranscriber gateway — patches pywhispercpp.model.Model."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import numpy as np
import pytest

MODULE = 'bolo.l3_interface_adapters.gateways.whisper_transcriber'


@patch(f'{MODULE}.os.close')
@patch(f'{MODULE}.os.dup2')
@patch(f'{MODULE}.os.dup')
@patch(f'{MODULE}.os.open', return_value=99)
class TestSuppressCStdout:
    def test_redirects_and_restores_fds(self, mock_open, mock_dup, mock_dup2, mock_close):
        from bolo.l3_interface_adapters.gateways.whisper_transcriber import (
            _suppress_c_stdout,  # noqa: PLC2701 -- testing private helper
        )

        mock_dup.side_effect = [10, 11]

        with _suppress_c_stdout():
            pass

        assert mock_dup2.call_count == 4
        assert mock_close.call_count == 3


@patch(f'{MODULE}._suppress_c_stdout', MagicMock())
@patch(f'{MODULE}.Model')
class TestWhisperTranscriber:
    def test_load_model_args(self, mock_model_cls):
        from bolo.l3_interface_adapters.gateways.whisper_transcriber import WhisperTranscriber

        t = WhisperTranscriber()
        t.load_model('/path/to/model.bin')

        mock_model_cls.assert_called_once_with('/path/to/model.bin', print_progress=False, print_realtime=False)
        assert t.loaded

    def test_transcribe_joins_segments(self, mock_model_cls):
        from bolo.l3_interface_adapters.gateways.whisper_transcriber import WhisperTranscriber

        mock_model_cls.return_value.transcribe.return_value = [
            SimpleNamespace(text=' नमस्ते '),
            SimpleNamespace(text='   '),
            SimpleNamespace(text='दोस्त'),
        ]
        t = WhisperTranscriber()
        t.load_model('/m.bin')
        audio = np.zeros(16000, dtype=np.float32)

        assert t.transcribe(audio, 'hi') == 'नमस्ते दोस्त'
        mock_model_cls.return_value.transcribe.assert_called_once_with(audio, language='hi')

    def test_transcribe_nothing(self, mock_model_cls):
        from bolo.l3_interface_adapters.gateways.whisper_transcriber import WhisperTranscriber

        mock_model_cls.return_value.transcribe.return_value = []
        t = WhisperTranscriber()
        t.load_model('/m.bin')

        assert t.transcribe(np.zeros(10, dtype=np.float32), 'en') == ''

    def test_transcribe_without_model_raises(self, _mock_model_cls):
        from bolo.l3_interface_adapters.gateways.whisper_transcriber import WhisperTranscriber

        with pytest.raises(RuntimeError, match='not loaded'):
            WhisperTranscriber().transcribe(np.zeros(10, dtype=np.float32), 'en')

    def test_close_releases_model(self, _mock_model_cls):
        from bolo.l3_interface_adapters.gateways.whisper_transcriber import WhisperTranscriber

        t = WhisperTranscriber()
        t.load_model('/m.bin')
        t.close()
        t.close()

        assert not t.loaded
