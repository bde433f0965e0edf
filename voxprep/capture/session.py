"""CaptureSession — realtime microphone transcription.

Two execution contexts:
- the audio driver thread, which calls ``_on_audio`` for every captured block
  and appends it to the session's CaptureBuffer;
- an asyncio consumer task, which takes complete one-second batches, runs the
  full conditioning + transcription chain in a worker thread, and puts the
  text on a bounded result queue.

Batches cross from the driver thread to the event loop with
``loop.call_soon_threadsafe``. Both queues are bounded. The result queue
holds at most 100 items; when the caller stops reading, the consumer blocks
on ``put``. The batch queue holds at most 10 batches; a batch arriving while
it is full is dropped and counted (``capture_overrun``), so a stalled reader
never makes memory grow.

On stop, samples still buffered below one batch are discarded. Batches
already handed to the consumer are still transcribed, after which the
result stream ends.
"""

from __future__ import annotations

import asyncio
import contextlib
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import numpy as np

from voxprep._audio_constants import BATCH_QUEUE_SIZE, RESULT_QUEUE_SIZE
from voxprep._types import CaptureState
from voxprep.capture.buffer import CaptureBuffer
from voxprep.capture.state_machine import CaptureStateMachine
from voxprep.exceptions import (
    CaptureError,
    DeviceUnavailableError,
    StreamInitError,
)
from voxprep.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable

    from voxprep.config.audio import AudioConfig
    from voxprep.transcriber import AudioTranscriber

    # (config, callback) -> stream object with start(), stop() and close()
    StreamFactory = Callable[[AudioConfig, Callable[..., None]], Any]

logger = get_logger("capture.session")


@dataclass(frozen=True, slots=True)
class _EndOfStream:
    """Marker put on the result queue after the last transcription."""

    error: BaseException | None = None


def open_input_stream(config: AudioConfig, callback: Callable[..., None]) -> Any:
    """Open (but do not start) an input stream on the default device.

    Args:
        config: Sample rate, channel count and block size of the stream.
        callback: sounddevice callback ``(indata, frames, time, status)``.

    Returns:
        An unstarted ``sounddevice.InputStream``.

    Raises:
        DeviceUnavailableError: PortAudio is missing or there is no default input device.
        StreamInitError: The device rejected the stream parameters.
    """
    try:
        import sounddevice as sd
    except (ImportError, OSError) as exc:
        # OSError: the sounddevice package is installed but PortAudio is not.
        raise DeviceUnavailableError(f"sounddevice unavailable ({exc})") from exc

    try:
        device = sd.query_devices(kind="input")
    except (sd.PortAudioError, ValueError) as exc:
        raise DeviceUnavailableError(str(exc)) from exc

    try:
        stream = sd.InputStream(
            samplerate=config.sample_rate,
            channels=config.channels,
            blocksize=config.buffer_size,
            dtype="float32",
            callback=callback,
        )
    except (sd.PortAudioError, ValueError) as exc:
        raise StreamInitError(str(exc)) from exc

    logger.debug("input_device_opened", device=device.get("name") if device else None)
    return stream


class CaptureSession:
    """Realtime capture session: IDLE -> CAPTURING -> IDLE.

    Owns one CaptureBuffer, one stream and one result queue; nothing is shared
    with other sessions. Not reentrant: starting a session that is already
    capturing raises InvalidTransitionError.

    Args:
        transcriber: Runs the conditioning chain and the transcription policy.
        stream_factory: Opens the input stream. Default: ``open_input_stream``
            (default sounddevice input device).
        result_queue_size: Capacity of the result queue. Default: 100.
        batch_queue_size: Batches waiting for the consumer before new ones
            are dropped. Default: 10.
    """

    def __init__(
        self,
        transcriber: AudioTranscriber,
        *,
        stream_factory: StreamFactory | None = None,
        result_queue_size: int = RESULT_QUEUE_SIZE,
        batch_queue_size: int = BATCH_QUEUE_SIZE,
    ) -> None:
        if batch_queue_size <= 0:
            msg = f"batch_queue_size must be positive, got {batch_queue_size}"
            raise ValueError(msg)
        self._transcriber = transcriber
        self._config = transcriber.config
        self._stream_factory = stream_factory or open_input_stream
        self._result_queue_size = result_queue_size
        self._batch_queue_size = batch_queue_size
        self._machine = CaptureStateMachine()

        self._buffer = CaptureBuffer(batch_size=self._config.sample_rate)
        self._stream: Any = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._batches: asyncio.Queue[np.ndarray | None] | None = None
        self._results: asyncio.Queue[str | _EndOfStream] | None = None
        self._consumer: asyncio.Task[None] | None = None
        self._accepting = False

        self._batches_submitted = 0
        self._batches_dropped = 0
        self._results_emitted = 0

    @property
    def state(self) -> CaptureState:
        """Current session state."""
        return self._machine.state

    @property
    def buffered_samples(self) -> int:
        """Captured samples waiting to fill the next batch."""
        return self._buffer.pending

    @property
    def batches_submitted(self) -> int:
        """Batches handed to the consumer since the last start."""
        return self._batches_submitted

    @property
    def batches_dropped(self) -> int:
        """Batches discarded because the batch queue was full."""
        return self._batches_dropped

    @property
    def queued_batches(self) -> int:
        """Batches waiting for the consumer."""
        return self._batches.qsize() if self._batches is not None else 0

    @property
    def pending_results(self) -> int:
        """Transcriptions waiting to be read."""
        return self._results.qsize() if self._results is not None else 0

    async def start(self) -> None:
        """Open the input stream and start capturing.

        On failure the session stays IDLE.

        Raises:
            InvalidTransitionError: The session is already capturing.
            DeviceUnavailableError: No input device.
            StreamInitError: The stream could not be built or started.
        """
        self._machine.ensure_can_transition(CaptureState.CAPTURING)

        self._loop = asyncio.get_running_loop()
        self._buffer = CaptureBuffer(batch_size=self._config.sample_rate)
        # One slot beyond the batch limit is kept free for the end marker.
        self._batches = asyncio.Queue(maxsize=self._batch_queue_size + 1)
        self._results = asyncio.Queue(maxsize=self._result_queue_size)
        self._batches_submitted = 0
        self._batches_dropped = 0
        self._results_emitted = 0

        try:
            stream = self._stream_factory(self._config, self._on_audio)
        except CaptureError:
            raise
        except Exception as exc:
            raise StreamInitError(str(exc)) from exc

        self._accepting = True
        try:
            stream.start()
        except Exception as exc:
            self._accepting = False
            with contextlib.suppress(Exception):
                stream.close()
            raise StreamInitError(str(exc)) from exc

        self._stream = stream
        self._consumer = asyncio.create_task(self._consume(self._batches, self._results))
        self._machine.transition(CaptureState.CAPTURING)

        logger.info(
            "capture_started",
            sample_rate=self._config.sample_rate,
            channels=self._config.channels,
            buffer_size=self._config.buffer_size,
        )

    async def stop(self) -> None:
        """Detach the input stream and end the result stream.

        Samples buffered below one batch are discarded. A batch already being
        transcribed is not aborted; its text is still delivered.

        Raises:
            InvalidTransitionError: The session is not capturing.
        """
        self._machine.transition(CaptureState.IDLE)
        self._accepting = False

        stream, self._stream = self._stream, None
        try:
            # PortAudio waits for pending callbacks; keep the loop responsive.
            await asyncio.to_thread(stream.stop)
        finally:
            stream.close()
            discarded = self._buffer.clear()
            if self._loop is not None and self._batches is not None:
                # Queued behind batches the driver thread already scheduled.
                self._loop.call_soon(self._batches.put_nowait, None)

            logger.info(
                "capture_stopped",
                discarded_samples=discarded,
                batches_submitted=self._batches_submitted,
                batches_dropped=self._batches_dropped,
            )

    async def wait_closed(self) -> None:
        """Wait until the consumer has finished every submitted batch."""
        if self._consumer is not None:
            await self._consumer

    async def get(self) -> str | None:
        """Next transcription, or None once the session has been stopped and drained.

        Raises:
            CaptureError: The session was never started.
            Exception: Whatever the processing chain raised; the stream ends with it.
        """
        if self._results is None:
            msg = "Capture session was never started"
            raise CaptureError(msg)

        item = await self._results.get()
        if isinstance(item, _EndOfStream):
            # Leave the marker in place so later readers also see the end.
            self._results.put_nowait(item)
            if item.error is not None:
                raise item.error
            return None
        return item

    async def results(self) -> AsyncIterator[str]:
        """Iterate transcriptions until the session is stopped and drained."""
        while True:
            text = await self.get()
            if text is None:
                return
            yield text

    async def __aenter__(self) -> CaptureSession:
        await self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        if self._machine.state is CaptureState.CAPTURING:
            await self.stop()

    def _on_audio(self, indata: np.ndarray, frames: int, time_info: object, status: object) -> None:
        """sounddevice callback; runs on the driver thread."""
        if status:
            logger.warning("capture_status", status=str(status))
        if not self._accepting:
            return

        batches = self._buffer.append(indata)
        if not batches:
            return

        loop, queue = self._loop, self._batches
        if loop is None or queue is None or loop.is_closed():
            return
        for batch in batches:
            loop.call_soon_threadsafe(self._enqueue_batch, queue, batch)

    def _enqueue_batch(self, queue: asyncio.Queue[np.ndarray | None], batch: np.ndarray) -> None:
        """Hand a batch to the consumer; runs on the event loop."""
        if queue is not self._batches:
            # Left over from a previous start.
            return
        if queue.qsize() >= self._batch_queue_size:
            self._batches_dropped += 1
            logger.warning(
                "capture_overrun",
                dropped_batches=self._batches_dropped,
                queued_batches=queue.qsize(),
            )
            return
        self._batches_submitted += 1
        queue.put_nowait(batch)

    async def _consume(
        self,
        batches: asyncio.Queue[np.ndarray | None],
        results: asyncio.Queue[str | _EndOfStream],
    ) -> None:
        """Transcribe batches until the stop marker arrives."""
        try:
            while True:
                batch = await batches.get()
                if batch is None:
                    break
                text = await asyncio.to_thread(self._transcriber.transcribe_samples, batch)
                await results.put(text)
                self._results_emitted += 1
                logger.debug("batch_transcribed", samples=len(batch), text_length=len(text))
        except Exception as exc:
            logger.error("capture_consumer_failed", error=str(exc), exc_info=True)
            await results.put(_EndOfStream(error=exc))
            return

        await results.put(_EndOfStream())
        logger.debug("capture_drained", results_emitted=self._results_emitted)
