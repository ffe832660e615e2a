"""Throttled progress reporting for single-file copies."""

from treeshift.models.results import FileProgress, FileProgressCallback


class ThrottledFileProgress:
    """Accumulates written bytes and reports them at a minimum byte interval.

    A report is sent each time at least ``update_byte_interval`` bytes were
    written since the previous one, plus one final report from
    :meth:`finish`. Throttling state lives on the instance, so each copy
    gets its own.
    """

    def __init__(
        self,
        bytes_total: int,
        update_byte_interval: int,
        callback: FileProgressCallback | None = None,
    ) -> None:
        self.bytes_total = bytes_total
        self.bytes_finished = 0
        self.update_byte_interval = update_byte_interval
        self.callback = callback
        self._bytes_since_last_report = 0

    def advance(self, byte_count: int) -> None:
        self.bytes_finished += byte_count
        self._bytes_since_last_report += byte_count
        if self._bytes_since_last_report >= self.update_byte_interval:
            self._bytes_since_last_report = 0
            self._report()

    def finish(self) -> FileProgress:
        """Send the final report and return it."""
        # The file may have changed size since it was measured
        self.bytes_total = max(self.bytes_total, self.bytes_finished)
        return self._report()

    def _report(self) -> FileProgress:
        progress = FileProgress(
            bytes_finished=self.bytes_finished, bytes_total=self.bytes_total
        )
        if self.callback is not None:
            self.callback(progress)
        return progress
