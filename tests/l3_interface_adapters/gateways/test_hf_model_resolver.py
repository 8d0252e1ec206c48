"""Tests for HF model resolver gateway."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from bolo.l1_entities.errors import ModelResolutionError
from bolo.l3_interface_adapters.gateways.hf_model_resolver import (
    WHISPER_CPP_MODELS,
    WHISPER_CPP_REPO,
    HfModelResolver,
)

MODULE = 'bolo.l3_interface_adapters.gateways.hf_model_resolver'


class TestHfModelResolver:
    def test_absolute_path_exists(self, tmp_path: Path):
        model_file = tmp_path / 'model.bin'
        model_file.touch()

        assert HfModelResolver(cache_dir=tmp_path).resolve(str(model_file)) == str(model_file)

    def test_absolute_path_not_found(self, tmp_path: Path):
        with pytest.raises(ModelResolutionError, match='not found'):
            HfModelResolver(cache_dir=tmp_path).resolve(str(tmp_path / 'nope.bin'))

    def test_passthrough_name(self, tmp_path: Path):
        assert HfModelResolver(cache_dir=tmp_path).resolve('small') == 'small'

    def test_default_model_is_known(self):
        assert WHISPER_CPP_MODELS['large-v3-turbo-q8_0'] == 'ggml-large-v3-turbo-q8_0.bin'

    @patch(f'{MODULE}.hf_hub_download')
    def test_cached_file_skips_download(self, mock_download, tmp_path: Path):
        cached = tmp_path / 'ggml-large-v3-turbo-q8_0.bin'
        cached.touch()

        result = HfModelResolver(cache_dir=tmp_path).resolve('large-v3-turbo-q8_0')

        assert result == str(cached)
        mock_download.assert_not_called()

    @patch(f'{MODULE}.hf_hub_download')
    def test_downloads_missing_file(self, mock_download, tmp_path: Path):
        cache = tmp_path / 'models'
        mock_download.return_value = str(cache / 'ggml-small-q8_0.bin')

        result = HfModelResolver(cache_dir=cache).resolve('small-q8_0')

        assert result == str(cache / 'ggml-small-q8_0.bin')
        assert cache.is_dir()
        mock_download.assert_called_once_with(repo_id=WHISPER_CPP_REPO, filename='ggml-small-q8_0.bin', local_dir=cache)

    @patch(f'{MODULE}.hf_hub_download', side_effect=OSError('offline'))
    def test_download_failure_is_resolution_error(self, _mock_download, tmp_path: Path):
        with pytest.raises(ModelResolutionError, match='offline'):
            HfModelResolver(cache_dir=tmp_path).resolve('base-q8_0')
