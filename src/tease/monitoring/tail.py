"""
Tail fragment extraction.

Given the trailing window of the scratch file, pick the last line for the
progress display.
"""

NEWLINE_BYTE = 0x0A
NUL_BYTE = 0x00


def extract_tail_fragment(window: bytes) -> bytes:
    """
    Return the last line contained in ``window``.

    One trailing newline is ignored. The fragment is everything after the
    nearest remaining newline, or the whole window when there is none. A NUL
    byte ends the fragment early.

    >>> extract_tail_fragment(b"build ok\\nbuild ok2\\n")
    b'build ok2'
    """
    end = len(window)
    if end > 0 and window[end - 1] == NEWLINE_BYTE:
        end -= 1

    start = 0
    index = end - 1
    while index >= 0:
        if window[index] == NEWLINE_BYTE:
            start = index + 1
            break
        index -= 1

    stop = start
    while stop < end and window[stop] != NUL_BYTE:
        stop += 1

    return window[start:stop]
