"""All magic values live here — no inline literals anywhere else."""

# Telegram file download endpoint; bare file paths are resolved against it.
TELEGRAM_FILE_API = "https://api.telegram.org/file/bot%s/%s"

# Audio normalization (what whisper.cpp expects)
FFMPEG_BINARY = "ffmpeg"
NORMALIZED_SAMPLE_RATE = 16000
NORMALIZED_CHANNELS = 1
NORMALIZED_CODEC = "pcm_s16le"

# Temporary artifacts
RAW_INPUT_PREFIX = "input_"
NORMALIZED_OUTPUT_PREFIX = "output_"
NORMALIZED_SUFFIX = ".wav"
DEFAULT_VOICE_BASENAME = "voice.ogg"

# Remote transcription (OpenAI Whisper API)
WHISPER_MODEL = "whisper-1"

# Local transcription (whisper.cpp CLI)
WHISPER_CLI_BINARY = "whisper-cli"
WHISPER_CLI_BINARY_WINDOWS = "whisper-cli.exe"
WHISPER_MODEL_FLAG = "-m"
WHISPER_FILE_FLAG = "-f"
WHISPER_LANGUAGE_FLAG = "-l"
WHISPER_LANGUAGE_AUTO = "auto"

# Backends
BACKEND_LOCAL = "local"
BACKEND_REMOTE = "remote"

# Stage deadlines (seconds)
DEFAULT_FETCH_TIMEOUT = 60
DEFAULT_NORMALIZE_TIMEOUT = 60
DEFAULT_TRANSCRIBE_TIMEOUT = 300

# Progress reporting
PROGRESS_START = 10
PROGRESS_STEP = 5
PROGRESS_CAP = 90
PROGRESS_DONE = 100
PROGRESS_BLOCKS = 10
PROGRESS_FILLED = "▒"
PROGRESS_EMPTY = "░"
PROGRESS_LONG_VOICE_SECONDS = 300
PROGRESS_TICK_SHORT: float = 2.0
PROGRESS_TICK_LONG: float = 3.0
MSG_PROGRESS = "🔄 Progress: [%s%s] %d%%"

# Log / user-facing messages
MSG_BOT_STARTING = "Starting Telegram bot…"
MSG_BLOCKED_CHAT = "Blocked update from chat_id: %s"
MSG_SEND_OK = "✓ Sent transcript (%.1fs)"
MSG_SEND_FAIL = "✗ Send failed (%.1fs)"
MSG_VOICE_DURATION = "🎤 Voice message length: %d sec."
MSG_VOICE_FAILED = "⚠️ Could not process the voice message. Please try again."
MSG_VOICE_EMPTY = "No speech recognized in this voice message."
MSG_STAGE_FAILED = "Voice pipeline failed at %s (%s): %s"
MSG_STAGE_TIMEOUT = "%s timed out after %ss"
MSG_STAGE_CRASHED = "Unexpected error during %s"
MSG_CLEANUP_FAILED = "Could not remove temporary file %s: %s"
MSG_PROGRESS_EDIT_FAILED = "Progress update failed: %s"

CMD_START = "start"
CMD_HELP = "help"
CMD_STATUS = "status"

MSG_START = "👋 Hi! Send me a voice message and I will transcribe it."

MSG_STATUS = (
    "Status\n"
    "  Backend      : %s\n"
    "  Normalize    : %s\n"
    "  Timeouts     : fetch %ss, normalize %ss, transcribe %ss\n"
)

MSG_HELP = (
    "voice-transcriber — speech to text on Telegram\n"
    "\n"
    "Commands:\n"
    "  /start                   — greeting\n"
    "  /help                    — show this message\n"
    "  /status                  — current config at a glance\n"
    "\n"
    "Media:\n"
    "  Voice note               — transcribed and sent back as text\n"
)
