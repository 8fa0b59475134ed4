import queue
import threading
from collections import namedtuple
from tqdm import tqdm
from .config import config, logger
from .errors import DigestError, StoreError, PipelineError
from .scanner import walk_files
from .utils import get_digest

ScanStats = namedtuple('ScanStats', ['files', 'recorded', 'failed'])

# Marks the closed end of the channel.
_DONE = object()


class HashingPipeline:
    """Feed file records through a bounded queue to a single index updater.

    The thread calling run() is the producer and blocks whenever the queue
    is full. One worker thread hashes records in FIFO order and is the only
    writer to the index while the pipeline runs.
    """

    def __init__(self, index, algorithm=config['hash_algorithm'],
                 queue_size=config['queue_size'], progress=config['progress']):
        if queue_size < 1:
            raise ValueError("queue_size must be at least 1")
        self.index = index
        self.algorithm = algorithm
        self.queue_size = queue_size
        self.progress = progress
        self._queue = None
        self._consumer_error = None
        self._files = 0
        self._recorded = 0
        self._failed = 0

    def handle_record(self, record):
        digest = get_digest(record.content, self.algorithm)
        logger.debug(f"{digest}-{record.path}")
        if self.index.record(digest, record.path):
            self._recorded += 1

    def _consume(self, pbar):
        while True:
            record = self._queue.get()
            if record is _DONE:
                break
            if self._consumer_error is not None:
                # Keep draining so the producer never blocks on a dead consumer.
                continue
            try:
                self.handle_record(record)
            except (DigestError, StoreError) as e:
                self._failed += 1
                logger.error(f"handle file err: {record.path}: {e}")
            except Exception as e:
                self._consumer_error = e
                logger.error(f"Index updater stopped: {e}")
            self._files += 1
            pbar.update(1)

    def run(self, records):
        """Process every record and return ScanStats once the index is up to date."""
        self._queue = queue.Queue(maxsize=self.queue_size)
        self._consumer_error = None
        self._files = self._recorded = self._failed = 0

        with tqdm(desc="Hashing", unit="file", disable=not self.progress) as pbar:
            consumer = threading.Thread(target=self._consume, args=(pbar,),
                                        name="index-updater", daemon=True)
            consumer.start()
            try:
                for record in records:
                    self._queue.put(record)
            finally:
                self._queue.put(_DONE)
                consumer.join()

        if self._consumer_error is not None:
            raise PipelineError(f"Index updater stopped: {self._consumer_error}") from self._consumer_error
        return ScanStats(self._files, self._recorded, self._failed)


def scan_directory(root, index, algorithm=config['hash_algorithm'],
                   queue_size=config['queue_size'], skip_unreadable=config['skip_unreadable'],
                   progress=config['progress']):
    """Walk root and record every file's digest in the index."""
    logger.info(f"Scanning {root}")
    pipeline = HashingPipeline(index, algorithm=algorithm, queue_size=queue_size,
                               progress=progress)
    stats = pipeline.run(walk_files(root, skip_unreadable=skip_unreadable))
    logger.info(f"Hashed {stats.files} files from {root}: {stats.recorded} new paths, "
                f"{stats.failed} failures")
    return stats
