"""
File Scanner - Doc mot file line-by-line va dem words vao private table.

Error handling (khong bao gio raise):
- Open failure (missing, permission, directory): log + tra ve table rong
- Bytes khong decode duoc: thay bang U+FFFD (khong phai letter nen tach word),
  cac dong con lai van duoc dem
- Read failure giua chung (OSError): log + dung doc, giu lai partial counts
File handle luon duoc dong (with block), ke ca khi dung som.
"""

from pathlib import Path
from typing import Union

from core.counting.frequency_table import FrequencyTable
from core.counting.tokenizer import DEFAULT_MIN_LENGTH, tokenize
from core.logging_config import log_debug, log_error

PathLike = Union[str, Path]

DEFAULT_ENCODING = "utf-8"


def scan_file(
    path: PathLike,
    *,
    min_length: int = DEFAULT_MIN_LENGTH,
    encoding: str = DEFAULT_ENCODING,
) -> FrequencyTable:
    """
    Dem words trong mot file.

    Args:
        path: Duong dan file can doc
        min_length: So ky tu toi thieu cua mot word
        encoding: Encoding cua file

    Returns:
        FrequencyTable (rong neu khong mo duoc file, partial neu doc loi)
    """
    table = FrequencyTable()

    try:
        handle = open(path, "r", encoding=encoding, errors="replace")
    except OSError as e:
        log_error(f"[FileScanner] Cannot open {path}", e)
        return table

    lines_read = 0
    with handle:
        try:
            for line in handle:
                lines_read += 1
                for word in tokenize(line.strip(), min_length):
                    table.increment(word)
        except OSError as e:
            log_error(
                f"[FileScanner] Read failed in {path} after {lines_read} lines, "
                f"keeping partial counts",
                e,
            )

    log_debug(f"[FileScanner] {path}: {lines_read} lines, {len(table)} words")
    return table


class FileScanner:
    """
    Scanner da cau hinh san min_length va encoding.

    Dung lam scanner callable cho ConcurrentAggregator:
        scanner = FileScanner(min_length=3)
        table = scanner.scan("notes.txt")
    """

    def __init__(
        self,
        min_length: int = DEFAULT_MIN_LENGTH,
        encoding: str = DEFAULT_ENCODING,
    ):
        self.min_length = min_length
        self.encoding = encoding

    def scan(self, path: PathLike) -> FrequencyTable:
        return scan_file(path, min_length=self.min_length, encoding=self.encoding)

    __call__ = scan
