"""Speech service facade.

Ties token management, synthesis, decoding and playback together behind a
single speak() call suitable for a UI or CLI.
"""

import logging
import time
from concurrent.futures import Future, ThreadPoolExecutor

from .audio import AudioBuffer, AudioPlayback, MockAudioPlayback, decode_wav
from .config import SpeechConfig
from .config.loader import validate_speech_config
from .config.secrets import Credential
from .tts.auth import TokenAuthenticator
from .tts.client import CancellationToken, SynthesisClient, SynthesisRequest
from .tts.errors import DecodeError, SpeechError, TokenNotReadyError
from .tts.formats import AudioOutputFormat
from .tts.voices import Gender, VoiceName

logger = logging.getLogger(__name__)


class SpeechService:
    """Authenticated text-to-speech with playback.

    Call start() once to authenticate; speak() or speak_async() afterwards.
    Synthesis and decode failures are raised to the caller and leave the
    token untouched.
    """

    def __init__(
        self,
        credential: Credential,
        speech_config: SpeechConfig | None = None,
        playback: AudioPlayback | None = None,
        authenticator: TokenAuthenticator | None = None,
        client: SynthesisClient | None = None,
    ) -> None:
        """Initialize the speech service.

        Args:
            credential: Speech resource key and region
            speech_config: Request defaults (voice, pitch, format, timeouts)
            playback: Output backend; defaults to MockAudioPlayback
            authenticator: Token source; created from config if omitted
            client: Synthesis client; created from config if omitted

        Raises:
            ValueError: If the configured voice or output format is unknown
        """
        self._credential = credential
        self._config = validate_speech_config(speech_config or SpeechConfig())
        self._playback = playback if playback is not None else MockAudioPlayback()
        self._authenticator = authenticator or TokenAuthenticator(
            renew_interval=self._config.token_renew_minutes * 60,
            timeout=self._config.timeout_seconds,
        )
        self._client = client or SynthesisClient(
            endpoint=self._config.synthesis_endpoint or credential.synthesis_endpoint,
            timeout=self._config.timeout_seconds,
            user_agent=self._config.user_agent,
        )
        self._executor: ThreadPoolExecutor | None = None

    @property
    def is_ready(self) -> bool:
        """True once a token has been obtained."""
        return self._authenticator.is_ready

    @property
    def playback(self) -> AudioPlayback:
        """The playback backend."""
        return self._playback

    def start(self) -> str:
        """Authenticate and start token renewal.

        Returns:
            The initial access token

        Raises:
            AuthError: If the token cannot be obtained
        """
        endpoint = self._config.token_endpoint or self._credential.token_endpoint
        return self._authenticator.authenticate(endpoint, self._credential.api_key)

    def build_request(
        self,
        text: str,
        voice: VoiceName | None = None,
        gender: Gender | str | None = None,
        pitch_delta_hz: int | None = None,
        output_format: AudioOutputFormat | None = None,
    ) -> SynthesisRequest:
        """Build a request, filling unset fields from the configuration."""
        return SynthesisRequest(
            text=text,
            voice=voice or VoiceName.from_string(self._config.voice),
            locale=self._config.locale,
            gender=Gender.from_value(gender if gender is not None else self._config.gender),
            pitch_delta_hz=(
                pitch_delta_hz if pitch_delta_hz is not None else self._config.pitch_delta_hz
            ),
            output_format=output_format or AudioOutputFormat.from_string(self._config.output_format),
        )

    def synthesize(
        self,
        text: str,
        voice: VoiceName | None = None,
        gender: Gender | str | None = None,
        pitch_delta_hz: int | None = None,
        output_format: AudioOutputFormat | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> AudioBuffer:
        """Synthesize text and decode the result.

        Raises:
            TokenNotReadyError: If start() has not succeeded
            SynthesisError: On a non-success response
            NetworkError: On transport failure or cancellation
            DecodeError: If the response is not a PCM16 WAV
        """
        token = self._authenticator.current_token()
        if token is None:
            raise TokenNotReadyError("Not authenticated; call start() first")

        request = self.build_request(text, voice, gender, pitch_delta_hz, output_format)
        if request.output_format is not None and not request.output_format.is_riff_pcm:
            raise DecodeError(
                f"output format {request.output_format.value} cannot be decoded for playback"
            )

        start_time = time.time()
        audio = self._client.synthesize(request, token, cancel_token)
        buffer = decode_wav(audio)
        latency_ms = int((time.time() - start_time) * 1000)

        logger.info(
            f"Synthesized {buffer.duration_ms}ms of audio at {buffer.sample_rate}Hz "
            f"in {latency_ms}ms"
        )
        return buffer

    def speak(
        self,
        text: str,
        voice: VoiceName | None = None,
        gender: Gender | str | None = None,
        pitch_delta_hz: int | None = None,
        output_format: AudioOutputFormat | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> AudioBuffer:
        """Synthesize text and play it. Blocks until playback finishes.

        Raises:
            SpeechError: If synthesis or decoding fails
            RuntimeError: If playback fails
        """
        try:
            buffer = self.synthesize(text, voice, gender, pitch_delta_hz, output_format, cancel_token)
        except SpeechError as e:
            logger.error(f"Unable to complete the TTS request: {e}")
            raise

        self._playback.play(buffer.samples, buffer.sample_rate, buffer.channel_count)
        return buffer

    def speak_async(
        self,
        text: str,
        voice: VoiceName | None = None,
        gender: Gender | str | None = None,
        pitch_delta_hz: int | None = None,
        output_format: AudioOutputFormat | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> "Future[AudioBuffer]":
        """Run speak() on a background worker and return its future.

        Requests are processed one at a time in submission order.
        """
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="cogtts-speak")
        return self._executor.submit(
            self.speak, text, voice, gender, pitch_delta_hz, output_format, cancel_token
        )

    def stop(self) -> None:
        """Stop renewal, playback and the background worker."""
        self._authenticator.stop()
        self._playback.stop()
        if self._executor is not None:
            self._executor.shutdown(wait=False, cancel_futures=True)
            self._executor = None

    def close(self) -> None:
        """Stop and release HTTP resources."""
        self.stop()
        self._authenticator.close()
        self._client.close()

    def __enter__(self) -> "SpeechService":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = ["SpeechService"]
