"""REST client for the Cognitive Services synthesis endpoint.

Sends an SSML document with the required headers and returns the audio
response body, either streamed in chunks or fully buffered.
"""

import logging
import threading
import time
from collections.abc import Callable, Iterator
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass

import httpx

from .errors import NetworkError, SynthesisCancelledError, SynthesisError
from .formats import AudioOutputFormat, output_format_header
from .ssml import SsmlRequestBuilder
from .voices import DEFAULT_VOICE, VOICE_CATALOG, Gender, VoiceInfo, VoiceName, resolve_voice

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_USER_AGENT = "CogTTSClient"
CHUNK_SIZE = 8192

# Client identification headers expected by the service
SEARCH_APP_ID = "07D3234E49CE426DAA29772419F436CA"
SEARCH_CLIENT_ID = "1ECFAE91408841A480F00935DC390960"


def synthesis_endpoint(region: str) -> str:
    """Return the regional synthesis URL."""
    return f"https://{region}.tts.speech.microsoft.com/cognitiveservices/v1"


@dataclass(frozen=True)
class SynthesisRequest:
    """A single text-to-speech request.

    Attributes:
        text: Text to speak
        voice: Voice to use
        locale: SSML language; defaults to the voice's locale when None
        gender: Voice gender
        pitch_delta_hz: Pitch adjustment in Hz (plus/minus)
        output_format: Audio format; None means the service default
    """

    text: str
    voice: VoiceName = DEFAULT_VOICE
    locale: str | None = None
    gender: Gender = Gender.FEMALE
    pitch_delta_hz: int = 0
    output_format: AudioOutputFormat | None = None


class CancellationToken:
    """Thread-safe cancellation flag for synthesis calls.

    Callbacks registered with add_callback() run once, on the thread that
    calls cancel(), or immediately if the token is already cancelled.
    """

    def __init__(self) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._callbacks: list[Callable[[], None]] = []

    def cancel(self) -> None:
        """Request cancellation."""
        with self._lock:
            if self._event.is_set():
                return
            self._event.set()
            callbacks = self._callbacks
            self._callbacks = []
        for callback in callbacks:
            callback()

    def add_callback(self, callback: Callable[[], None]) -> None:
        """Run callback when cancel() is called."""
        with self._lock:
            if not self._event.is_set():
                self._callbacks.append(callback)
                return
        callback()

    def remove_callback(self, callback: Callable[[], None]) -> None:
        """Unregister a callback; no-op if it is not registered."""
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

    @property
    def is_cancelled(self) -> bool:
        """True once cancel() has been called."""
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        """Raise SynthesisCancelledError if cancellation was requested."""
        if self._event.is_set():
            raise SynthesisCancelledError("Synthesis request was cancelled")


class SynthesisClient:
    """Issues authenticated synthesis requests."""

    def __init__(
        self,
        endpoint: str | None = None,
        region: str = "westus",
        http_client: httpx.Client | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        user_agent: str = DEFAULT_USER_AGENT,
        voice_catalog: dict[VoiceName, VoiceInfo] | None = None,
        ssml_builder: SsmlRequestBuilder | None = None,
    ) -> None:
        """Initialize the synthesis client.

        Args:
            endpoint: Synthesis URL; derived from region when omitted
            region: Service region, e.g. "westus"
            http_client: Shared client; one is created (and owned) if omitted
            timeout: Request timeout in seconds
            user_agent: Value of the User-Agent header
            voice_catalog: Voice lookup table (defaults to VOICE_CATALOG)
            ssml_builder: SSML builder (defaults to SsmlRequestBuilder)
        """
        self._endpoint = endpoint or synthesis_endpoint(region)
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=timeout)
        self._user_agent = user_agent
        self._catalog = voice_catalog if voice_catalog is not None else VOICE_CATALOG
        self._ssml_builder = ssml_builder or SsmlRequestBuilder()
        # Threads are started on first use
        self._executor = ThreadPoolExecutor(thread_name_prefix="cogtts-http")

    @property
    def endpoint(self) -> str:
        """Synthesis URL requests are sent to."""
        return self._endpoint

    def build_headers(self, token: str, output_format: AudioOutputFormat | None) -> dict[str, str]:
        """Return the request headers for a synthesis call."""
        return {
            "Content-Type": "application/ssml+xml",
            "X-Microsoft-OutputFormat": output_format_header(output_format),
            "Authorization": f"Bearer {token}",
            "X-Search-AppId": SEARCH_APP_ID,
            "X-Search-ClientID": SEARCH_CLIENT_ID,
            "User-Agent": self._user_agent,
        }

    def build_body(self, request: SynthesisRequest) -> str:
        """Resolve the voice and encode the request as SSML."""
        voice = resolve_voice(request.voice, self._catalog)
        locale = request.locale or voice.locale
        return self._ssml_builder.build(
            locale,
            request.gender,
            voice.wire_name,
            request.text,
            request.pitch_delta_hz,
        )

    def _send(
        self,
        http_request: httpx.Request,
        cancel_token: CancellationToken | None,
    ) -> httpx.Response:
        """Send a request and wait for the response headers.

        With a cancel token the blocking send runs on a worker thread so that
        cancel() returns control to the caller immediately. A response that
        arrives after cancellation is closed when it lands.
        """
        if cancel_token is None:
            return self._client.send(http_request, stream=True)

        future = self._executor.submit(self._client.send, http_request, stream=True)
        settled = threading.Event()
        wake = settled.set
        future.add_done_callback(lambda _: wake())
        cancel_token.add_callback(wake)
        try:
            settled.wait()
        finally:
            cancel_token.remove_callback(wake)

        if cancel_token.is_cancelled:
            future.cancel()
            future.add_done_callback(_close_abandoned_response)
            logger.debug("Synthesis request cancelled while waiting for response")
            raise SynthesisCancelledError("Synthesis request was cancelled")
        return future.result()

    def stream(
        self,
        request: SynthesisRequest,
        token: str,
        cancel_token: CancellationToken | None = None,
    ) -> Iterator[bytes]:
        """Send a synthesis request and yield the audio body in chunks.

        The response is closed when the iterator is exhausted, closed early,
        or cancelled. Cancellation is honoured while waiting for the response
        and between body chunks.

        Raises:
            SynthesisError: On a non-success status
            NetworkError: On transport failure or timeout
            SynthesisCancelledError: If cancel_token is triggered
        """
        body = self.build_body(request).encode("utf-8")
        headers = self.build_headers(token, request.output_format)

        if cancel_token is not None:
            cancel_token.raise_if_cancelled()

        http_request = self._client.build_request(
            "POST", self._endpoint, headers=headers, content=body
        )
        try:
            response = self._send(http_request, cancel_token)
            try:
                logger.debug(f"Synthesis response status code: {response.status_code}")

                if not response.is_success:
                    response.read()
                    raise SynthesisError(response.status_code, response.text)

                for chunk in response.iter_bytes(CHUNK_SIZE):
                    if cancel_token is not None:
                        cancel_token.raise_if_cancelled()
                    yield chunk

                if cancel_token is not None:
                    cancel_token.raise_if_cancelled()
            finally:
                response.close()
        except httpx.TimeoutException as e:
            raise NetworkError(f"Synthesis request timed out: {e}") from e
        except httpx.HTTPError as e:
            raise NetworkError(f"Synthesis request failed: {e}") from e

    def synthesize(
        self,
        request: SynthesisRequest,
        token: str,
        cancel_token: CancellationToken | None = None,
    ) -> bytes:
        """Send a synthesis request and return the complete audio body.

        Raises:
            SynthesisError: On a non-success status
            NetworkError: On transport failure or timeout
            SynthesisCancelledError: If cancel_token is triggered
        """
        start_time = time.time()
        audio = b"".join(self.stream(request, token, cancel_token))
        latency_ms = int((time.time() - start_time) * 1000)

        logger.debug(
            f"Synthesized '{request.text[:30]}...' with {request.voice.name} "
            f"in {latency_ms}ms ({len(audio)} bytes)"
        )
        return audio

    def close(self) -> None:
        """Stop the send workers and release the HTTP client if owned."""
        self._executor.shutdown(wait=False, cancel_futures=True)
        if self._owns_client:
            self._client.close()


def _close_abandoned_response(future: "Future[httpx.Response]") -> None:
    """Close a response nobody is waiting for anymore."""
    if future.cancelled() or future.exception() is not None:
        return
    future.result().close()


__all__ = [
    "CancellationToken",
    "SynthesisClient",
    "SynthesisRequest",
    "synthesis_endpoint",
]
