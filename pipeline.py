"""
Producer/Consumer Pipeline

Streams samples from a producer thread to a consumer thread through a bounded
FIFO queue. The consumer buffers everything it receives and hands the buffer to
the sink once, after the producer has closed the queue. The caller blocks on
the consumer's future until the sink has returned.
"""

import concurrent.futures
import logging
import queue
import threading

from constants import DEFAULT_QUEUE_SIZE

logger = logging.getLogger(__name__)

_CLOSED = object()


class PipelineCancelled(RuntimeError):
    """The run was cancelled before the producer finished."""


def _produce(samples, channel, stop_events, aborted):
    """
    Puts every sample on the channel in order, then closes it.

    Returns:
        bool: False if one of stop_events interrupted the run.
    """
    completed = False
    try:
        for sample in samples:
            if any(event.is_set() for event in stop_events):
                break
            channel.put(sample)
        else:
            completed = True
    except BaseException:
        aborted.set()
        raise
    finally:
        if not completed:
            aborted.set()
        channel.put(_CLOSED)
    return completed


def _consume(channel, sink, aborted):
    buffer = []
    while True:
        item = channel.get()
        if item is _CLOSED:
            break
        buffer.append(item)

    if aborted.is_set():
        logger.warning(f"Producer did not finish, discarding {len(buffer)} buffered samples")
        return None
    sink(buffer)
    return len(buffer)


def run_pipeline(samples, sink, maxsize=DEFAULT_QUEUE_SIZE, cancel_event=None, flush_timeout=None):
    """
    Runs samples through a producer and a consumer thread into sink.

    Args:
        samples (iterable): Samples in output order, consumed lazily.
        sink (callable): Called once with the list of all samples.
        maxsize (int): Capacity of the handoff queue; 0 means unbounded.
        cancel_event (threading.Event): Stops the producer when set.
        flush_timeout (float): Seconds to wait for the sink to finish.

    Returns:
        int: The number of samples handed to the sink.

    Raises:
        PipelineCancelled: If cancel_event stopped the producer. The sink is
            not called.
        concurrent.futures.TimeoutError: If the run did not finish within
            flush_timeout.
        Exception: Whatever the producer or the sink raised.
    """
    channel = queue.Queue(maxsize=maxsize)
    aborted = threading.Event()
    timed_out = threading.Event()
    stop_events = [timed_out] if cancel_event is None else [cancel_event, timed_out]

    executor = concurrent.futures.ThreadPoolExecutor(max_workers=2, thread_name_prefix='pipeline')
    try:
        consumer = executor.submit(_consume, channel, sink, aborted)
        producer = executor.submit(_produce, samples, channel, stop_events, aborted)

        try:
            written = consumer.result(timeout=flush_timeout)
        except concurrent.futures.TimeoutError:
            logger.error(f"Pipeline did not finish within {flush_timeout}s")
            timed_out.set()
            raise

        if not producer.result():
            raise PipelineCancelled("Pipeline cancelled before all samples were produced")
        logger.debug(f"Pipeline flushed {written} samples")
        return written
    finally:
        executor.shutdown(wait=False)
