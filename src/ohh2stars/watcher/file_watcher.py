import os
import time
from pathlib import Path
from typing import Callable, Dict, Optional

from loguru import logger
from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

NewFileCallback = Callable[[Path, str], None]


class HandHistoryHandler(FileSystemEventHandler):
    """Hands every grown OHH file in the watched folder to ``on_new_file(path, text)``."""

    def __init__(self, on_new_file: NewFileCallback, file_filter: Optional[Callable[[str], bool]] = None):
        super().__init__()
        self.on_new_file = on_new_file
        self.file_filter = file_filter or (lambda f: f.endswith('.ohh'))
        self.last_processed: Dict[str, int] = {}

    def on_created(self, event):
        self._handle(event)

    def on_modified(self, event):
        self._handle(event)

    def _handle(self, event):
        if event.is_directory:
            return

        file_path = Path(os.fsdecode(event.src_path))
        if not self.file_filter(str(file_path)):
            return

        try:
            current_size = file_path.stat().st_size
        except FileNotFoundError:
            return

        previous_size = self.last_processed.get(str(file_path), 0)
        if current_size <= previous_size:
            return

        try:
            text = file_path.read_text(encoding='utf-8', errors='replace')
        except OSError as e:
            logger.error(f"[FileWatcher] Error reading {file_path}: {e}")
            return
        self.last_processed[str(file_path)] = current_size

        try:
            self.on_new_file(file_path, text)
        except Exception:
            logger.exception(f"[FileWatcher] Callback error for {file_path}")


class FileWatcher:
    def __init__(self, dir_path, on_new_file: NewFileCallback,
                 file_filter: Optional[Callable[[str], bool]] = None, poll_interval: float = 1.0):
        if not os.path.isdir(dir_path):
            raise FileNotFoundError(f'{dir_path} is not a directory')
        self.dir_path = os.path.abspath(dir_path)
        self.handler = HandHistoryHandler(on_new_file, file_filter)
        self.poll_interval = poll_interval
        self.observer = Observer()

    def start(self):
        self.observer.schedule(self.handler, self.dir_path, recursive=False)
        self.observer.start()
        logger.info(f"Watching {self.dir_path} for new hand histories")

    def run_forever(self):
        self.start()
        try:
            while self.observer.is_alive():
                time.sleep(self.poll_interval)
        except KeyboardInterrupt:
            logger.info("Watcher interrupted")
        finally:
            self.stop()

    def stop(self):
        self.observer.stop()
        self.observer.join()
