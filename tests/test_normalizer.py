"""AudioNormalizer: ffmpeg availability check and conversion failures."""
import pytest
from unittest.mock import AsyncMock, patch

from src.pipeline.errors import NormalizeError, ToolUnavailableError
from src.pipeline.models import ArtifactKind, TemporaryAudioArtifact
from src.pipeline.normalizer import AudioNormalizer, build_normalize_cmd


@pytest.fixture
def raw(tmp_path):
    path = tmp_path / "input_1_voice.oga"
    path.write_bytes(b"OggS")
    return TemporaryAudioArtifact(path=path, kind=ArtifactKind.RAW_INPUT)


def test_build_normalize_cmd_uses_fixed_pcm_format(tmp_path):
    cmd = build_normalize_cmd("ffmpeg", tmp_path / "in.oga", tmp_path / "out.wav")

    assert cmd[:4] == ["ffmpeg", "-y", "-i", str(tmp_path / "in.oga")]
    assert cmd[cmd.index("-acodec") + 1] == "pcm_s16le"
    assert cmd[cmd.index("-ar") + 1] == "16000"
    assert cmd[cmd.index("-ac") + 1] == "1"
    assert cmd[-1] == str(tmp_path / "out.wav")


@pytest.mark.asyncio
async def test_missing_ffmpeg_raises_tool_unavailable(raw, tmp_path):
    run = AsyncMock()
    with patch("src.pipeline.normalizer.shutil.which", return_value=None), \
         patch("src.pipeline.normalizer.run_command", new=run):
        with pytest.raises(ToolUnavailableError):
            await AudioNormalizer().normalize(raw, tmp_path / "output_1.wav")

    run.assert_not_called()


@pytest.mark.asyncio
async def test_successful_conversion_returns_normalized_artifact(raw, tmp_path):
    run = AsyncMock(return_value=(0, b"", b""))
    destination = tmp_path / "output_1.wav"

    with patch("src.pipeline.normalizer.shutil.which", return_value="/usr/bin/ffmpeg"), \
         patch("src.pipeline.normalizer.run_command", new=run):
        artifact = await AudioNormalizer().normalize(raw, destination)

    assert artifact.path == destination
    assert artifact.kind is ArtifactKind.NORMALIZED_OUTPUT
    assert run.call_args.args[0] == "/usr/bin/ffmpeg"


@pytest.mark.asyncio
async def test_nonzero_exit_raises_normalize_error_with_stderr(raw, tmp_path):
    run = AsyncMock(return_value=(1, b"", b"Invalid data found when processing input"))

    with patch("src.pipeline.normalizer.shutil.which", return_value="/usr/bin/ffmpeg"), \
         patch("src.pipeline.normalizer.run_command", new=run):
        with pytest.raises(NormalizeError) as info:
            await AudioNormalizer().normalize(raw, tmp_path / "output_1.wav")

    assert "Invalid data" in info.value.stderr
    assert "Invalid data" in info.value.detail
    assert raw.path.exists()
