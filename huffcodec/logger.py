"""
logger.py

Logging module for huffcodec.


"""


from datetime import datetime
from typing import IO, Optional, Union

class LogLevel:
    INFO = 0
    WARNING = 1
    ERROR = 2
    PROGRESS = 3


class Log:
    def __init__(self, type_name: str, level: int, message: str) -> None:
        self.level = level
        self.type_name = type_name
        self.message = message
        self.date = datetime.now()

    def __str__(self) -> str:
        return f"{self.date} - {self.type_name} - {self.level} - {self.message}"

    def __repr__(self) -> str:
        return self.__str__()


class HistogramLog(Log):
    def __init__(self, distinct_symbols: int, total_symbols: int) -> None:
        self.distinct_symbols = distinct_symbols
        self.total_symbols = total_symbols
        super().__init__("Histogram_log", LogLevel.INFO, f"Distinct symbols: {distinct_symbols}, Total symbols: {total_symbols}")


class TreeBuildLog(Log):
    def __init__(self, leaf_count: int, depth: int) -> None:
        self.leaf_count = leaf_count
        self.depth = depth
        super().__init__("Tree_build_log", LogLevel.INFO, f"Leaves: {leaf_count}, Depth: {depth}")


class CodeAssignmentLog(Log):
    def __init__(self, symbol: int, frequency: int, code_length: int) -> None:
        self.symbol = symbol
        self.frequency = frequency
        self.code_length = code_length
        super().__init__("Code_assignment_log", LogLevel.INFO, f"Symbol: {symbol}, Frequency: {frequency}, Code length: {code_length}")


class SegmentLog(Log):
    def __init__(self, segment_name: str, payload_bits: int, padding: int) -> None:
        self.segment_name = segment_name
        self.payload_bits = payload_bits
        self.padding = padding
        super().__init__("Segment_log", LogLevel.INFO, f"Segment: {segment_name}, Bits: {payload_bits}, Padding: {padding}")


class CodingProgressStep(Log):
    def __init__(self, message: str, total_steps: Optional[int] = None) -> None:
        self.base_message = message
        self.total_steps = total_steps
        super().__init__("Coding_progress_step", LogLevel.PROGRESS, message)


class Logger:
    def __init__(self, stream: Optional[IO[str]] = None) -> None:
        # None prints to whatever sys.stdout is at call time.
        self.stream = stream

        self.coding_progress_count = 0

        self.logs = []

        self.record_info = True
        self.record_warning = True
        self.record_error = True
        self.record_progress = False

        self.display_info = False
        self.display_warning = True
        self.display_error = True
        self.display_progress = True

        self.coding_step_interval_count = 10

    def start_coding_progress(self) -> None:
        """Restart the step count shown in coding progress logs."""
        self.coding_progress_count = 0

    def _display(self, log: Log) -> None:
        print(log, file=self.stream)

    def log(self, log: Union[Log, str]) -> None:
        if not (isinstance(log, Log) or isinstance(log, str)):
            raise ValueError("Log must be an instance of Log class or a string")
        if isinstance(log, str):
            log = Log("General", LogLevel.INFO, log)

        if log.level == LogLevel.INFO:
            if self.record_info:
                self.logs.append(log)
            if self.display_info:
                self._display(log)
        elif log.level == LogLevel.WARNING:
            if self.record_warning:
                self.logs.append(log)
            if self.display_warning:
                self._display(log)
        elif log.level == LogLevel.ERROR:
            if self.record_error:
                self.logs.append(log)
            if self.display_error:
                self._display(log)
        elif log.level == LogLevel.PROGRESS:
            self.coding_progress_count += 1
            count = self.coding_progress_count
            if isinstance(log, CodingProgressStep):
                if log.total_steps is not None:
                    log.message = f"{log.base_message} ({count}/{log.total_steps})"
                else:
                    log.message = f"{log.base_message} ({count})"
            if self.record_progress:
                self.logs.append(log)
            if self.display_progress and (count % self.coding_step_interval_count == 0):
                self._display(log)

    def save(self, file_path: str) -> None:
        with open(file_path, 'w') as file:
            for log in self.logs:
                file.write(str(log) + "\n")
