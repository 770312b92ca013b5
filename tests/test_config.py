import pytest

from loudbars.config import CHUNK_SECONDS, WINDOW_SIZE, VisualizerConfig


def test_defaults_match_fixed_constants():
    config = VisualizerConfig()

    assert config.window_size == WINDOW_SIZE == 100
    assert config.chunk_seconds == CHUNK_SECONDS == pytest.approx(0.05)
    assert (config.db_floor, config.db_ceil) == (-60.0, 0.0)
    assert config.to_dict()["audio_path"].endswith("pink.mp3")


@pytest.mark.parametrize("rate,size", [(44100, 2205), (48000, 2400), (8000, 400), (10, 1)])
def test_chunk_size_is_fifty_milliseconds(rate, size):
    assert VisualizerConfig().chunk_size(rate) == size


def test_chunk_size_rejects_bad_rate():
    with pytest.raises(ValueError):
        VisualizerConfig().chunk_size(0)
