from pathlib import Path

from app.conversion.commands import build_ffmpeg_command
from app.conversion.models import OutputFormat

IN = Path("/tmp/input_a.wav")
OUT = Path("/tmp/output_b.mp3")


def _flags(cmd):
    # Strip "ffmpeg -y -i <in>" and the trailing output path
    return cmd[4:-1]


def test_command_frames_input_and_output():
    cmd = build_ffmpeg_command("/usr/bin/ffmpeg", IN, OUT, OutputFormat.MP3, "128k")
    assert cmd[:4] == ["/usr/bin/ffmpeg", "-y", "-i", str(IN)]
    assert cmd[-1] == str(OUT)


def test_mp3_uses_requested_bitrate():
    cmd = build_ffmpeg_command("ffmpeg", IN, OUT, OutputFormat.MP3, "192k")
    assert _flags(cmd) == ["-b:a", "192k"]


def test_mp3_64k_selects_mono_preset():
    cmd = build_ffmpeg_command("ffmpeg", IN, OUT, OutputFormat.MP3, "64k")
    assert _flags(cmd) == ["-b:a", "64k", "-ac", "1", "-ar", "22050"]


def test_mp3_mono64_selects_mono_preset():
    cmd = build_ffmpeg_command("ffmpeg", IN, OUT, OutputFormat.MP3, "mono64")
    assert _flags(cmd) == ["-b:a", "64k", "-ac", "1", "-ar", "22050"]


def test_wav_ignores_quality():
    cmd = build_ffmpeg_command("ffmpeg", IN, Path("/tmp/o.wav"), OutputFormat.WAV, "320k")
    assert _flags(cmd) == ["-acodec", "pcm_s16le"]
    assert "320k" not in cmd


def test_ogg_uses_vorbis():
    cmd = build_ffmpeg_command("ffmpeg", IN, Path("/tmp/o.ogg"), OutputFormat.OGG, "96k")
    assert _flags(cmd) == ["-b:a", "96k", "-acodec", "libvorbis"]


def test_unknown_format_falls_back_to_bitrate_only():
    cmd = build_ffmpeg_command("ffmpeg", IN, Path("/tmp/o.flac"), OutputFormat.OTHER, "64k")
    assert _flags(cmd) == ["-b:a", "64k"]


def test_file_names_with_shell_characters_stay_single_arguments():
    weird = Path('/tmp/input_x"; rm -rf ~.mp3')
    cmd = build_ffmpeg_command("ffmpeg", weird, OUT, OutputFormat.MP3, "128k")
    assert str(weird) in cmd


def test_output_format_from_name():
    assert OutputFormat.from_name("mp3") is OutputFormat.MP3
    assert OutputFormat.from_name("OGG") is OutputFormat.OGG
    assert OutputFormat.from_name("flac") is OutputFormat.OTHER
