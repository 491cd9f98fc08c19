"""
Structural Differ v1.0.0
========================
Line- and word-granularity alignment of two normalized texts.

Uses difflib.SequenceMatcher for line alignment and diff-match-patch
(word tokens mapped onto single characters) for the word diff. Both
passes run independently over the same normalized text.

Runs carry their exact content, line terminators and whitespace included,
so replaying unchanged+removed runs rebuilds document 1 and
unchanged+added runs rebuilds document 2.
"""

import re
import difflib
from typing import List, Tuple

import diff_match_patch as dmp_module

from config_logging import get_logger

from .models import DiffLine, DiffResult, DiffRun, DiffStatistics

logger = get_logger('tos_compare.differ')

ADDED = 'added'
REMOVED = 'removed'
UNCHANGED = 'unchanged'

_DMP_TAGS = {-1: REMOVED, 0: UNCHANGED, 1: ADDED}

_LINE_RE = re.compile(r'[^\n]*\n|[^\n]+')
_WORD_RE = re.compile(r'\S+|\s+')
_TRAILING_WS_RE = re.compile(r'\s+$', re.MULTILINE)


def normalize_text(text: str) -> str:
    """
    Normalize text before diffing.

    CRLF and CR become LF, trailing whitespace is stripped from every line,
    and the whole text is trimmed. Line breaks count as trailing whitespace,
    so blank and whitespace-only lines disappear.
    """
    text = text.replace('\r\n', '\n').replace('\r', '\n')
    return _TRAILING_WS_RE.sub('', text).strip()


def split_lines(text: str) -> List[str]:
    """Lines with their '\\n' terminators kept; the last line may lack one."""
    return _LINE_RE.findall(text)


def tokenize_words(text: str) -> List[str]:
    """Words and the whitespace between them, as separate tokens."""
    return _WORD_RE.findall(text)


def _append_run(runs: List[DiffRun], tag: str, content: str, granularity: str):
    """Append content, extending the previous run when the tag repeats."""
    if not content:
        return
    if runs and runs[-1].tag == tag:
        runs[-1].content += content
    else:
        runs.append(DiffRun(tag=tag, content=content, granularity=granularity))


class DocumentDiffer:
    """
    Structural diff engine.

    Stateless between calls; one instance can serve concurrent requests.
    """

    def __init__(self, word_diff_timeout: float = 0.0):
        """
        Initialize the differ.

        Args:
            word_diff_timeout: Seconds diff-match-patch may spend on the word
                               diff; 0 means no limit, which keeps output
                               independent of machine speed
        """
        self.dmp = dmp_module.diff_match_patch()
        self.dmp.Diff_Timeout = word_diff_timeout

    def diff(self, text1: str, text2: str) -> DiffResult:
        """
        Compare two texts at line and word granularity.

        Args:
            text1: Original document text
            text2: New document text

        Returns:
            DiffResult with line runs, per-line rows, word runs,
            statistics and a one-line summary
        """
        normalized1 = normalize_text(text1)
        normalized2 = normalize_text(text2)
        logger.debug("Diff started", length1=len(normalized1), length2=len(normalized2))

        line_runs = self.diff_lines(normalized1, normalized2)
        line_rows = self._number_lines(line_runs)
        word_runs = self.diff_words(normalized1, normalized2)
        statistics = calculate_statistics(line_runs)

        logger.debug(
            "Diff complete",
            added=statistics.added_lines,
            removed=statistics.removed_lines,
            unchanged=statistics.unchanged_lines,
        )

        return DiffResult(
            line_diff=line_runs,
            line_rows=line_rows,
            word_diff=word_runs,
            statistics=statistics,
            summary=summarize(statistics),
        )

    def diff_lines(self, normalized1: str, normalized2: str) -> List[DiffRun]:
        """
        Align whole lines of two normalized texts.

        Replaced blocks are emitted as a removed run followed by an added run.
        """
        old_lines = split_lines(normalized1)
        new_lines = split_lines(normalized2)
        runs: List[DiffRun] = []

        matcher = difflib.SequenceMatcher(None, old_lines, new_lines, autojunk=False)
        for tag, i1, i2, j1, j2 in matcher.get_opcodes():
            if tag == 'equal':
                _append_run(runs, UNCHANGED, ''.join(old_lines[i1:i2]), 'line')
            else:
                # 'delete', 'insert' and 'replace' all reduce to these two
                _append_run(runs, REMOVED, ''.join(old_lines[i1:i2]), 'line')
                _append_run(runs, ADDED, ''.join(new_lines[j1:j2]), 'line')

        return runs

    def diff_words(self, normalized1: str, normalized2: str) -> List[DiffRun]:
        """Align word and whitespace tokens over the full normalized texts."""
        chars1, chars2, token_array = self._tokens_to_chars(normalized1, normalized2)
        diffs = self.dmp.diff_main(chars1, chars2, False)
        self.dmp.diff_charsToLines(diffs, token_array)

        runs: List[DiffRun] = []
        for op, text in diffs:
            _append_run(runs, _DMP_TAGS[op], text, 'word')
        return runs

    def _tokens_to_chars(self, text1: str, text2: str) -> Tuple[str, str, List[str]]:
        """
        Encode each distinct token as one character.

        Mirrors diff-match-patch's line mode with words as the unit; index 0
        is reserved so no token maps to '\\x00'.
        """
        token_array = ['']
        token_hash = {}

        def encode(text: str) -> str:
            chars = []
            for token in tokenize_words(text):
                if token not in token_hash:
                    token_array.append(token)
                    token_hash[token] = len(token_array) - 1
                chars.append(chr(token_hash[token]))
            return ''.join(chars)

        return encode(text1), encode(text2), token_array

    def _number_lines(self, runs: List[DiffRun]) -> List[DiffLine]:
        """
        Assign 1-based line numbers to runs and expand them into rows.

        Added runs consume only document 2 numbers, removed runs only
        document 1 numbers, unchanged runs advance both.
        """
        rows = []
        line1 = 1
        line2 = 1

        for run in runs:
            fragments = run.lines
            count = len(fragments)

            if run.tag in (REMOVED, UNCHANGED):
                run.old_start, run.old_end = line1, line1 + count - 1
            if run.tag in (ADDED, UNCHANGED):
                run.new_start, run.new_end = line2, line2 + count - 1

            for fragment in fragments:
                row = DiffLine(tag=run.tag, content=fragment)
                if run.tag != ADDED:
                    row.line_number_1 = line1
                    line1 += 1
                if run.tag != REMOVED:
                    row.line_number_2 = line2
                    line2 += 1
                rows.append(row)

        return rows


def calculate_statistics(line_runs: List[DiffRun]) -> DiffStatistics:
    """Count non-empty line fragments per tag."""
    statistics = DiffStatistics()
    for run in line_runs:
        count = sum(1 for line in run.lines if line)
        if run.tag == ADDED:
            statistics.added_lines += count
        elif run.tag == REMOVED:
            statistics.removed_lines += count
        else:
            statistics.unchanged_lines += count
    return statistics


def summarize(statistics: DiffStatistics) -> str:
    """One-line human-readable summary of the line statistics."""
    added = statistics.added_lines
    removed = statistics.removed_lines

    if added == 0 and removed == 0:
        return "The documents are identical."

    summary = f"{statistics.change_percentage:g}% of the document has changed. "
    if added > 0 and removed > 0:
        summary += f"{added} lines were added and {removed} lines were removed."
    elif added > 0:
        summary += f"{added} lines were added."
    else:
        summary += f"{removed} lines were removed."
    return summary


# Convenience function
def compute_diff(text1: str, text2: str, **kwargs) -> DiffResult:
    """
    Compute the structural diff between two texts.

    Args:
        text1: Original text
        text2: New text
        **kwargs: Passed to DocumentDiffer

    Returns:
        DiffResult
    """
    differ = DocumentDiffer(**kwargs)
    return differ.diff(text1, text2)
