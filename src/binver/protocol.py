"""binver wire constants.

Single source of truth for header and prefix layouts.
Keep this file stable. Writers and readers of old documents depend on it.
"""

# Document header: [Major(2) | Minor(2) | Patch(2)] = 6 bytes
HEADER_FMT = ">HHH"
HEADER_LEN = 6

# Tagged-union selector (variant index or explicit discriminant)
SELECTOR_FMT = ">H"

# Length prefix for text, blobs and sequences
LENGTH_FMT = ">I"
MAX_LENGTH = 0xFFFFFFFF

# Version components and selectors are uint16
MAX_U16 = 0xFFFF

# Fixed-width numeric layouts (big-endian)
U8_FMT = ">B"
U16_FMT = ">H"
U32_FMT = ">I"
U64_FMT = ">Q"
I8_FMT = ">b"
I16_FMT = ">h"
I32_FMT = ">i"
I64_FMT = ">q"
F32_FMT = ">f"
F64_FMT = ">d"

# 128-bit integers have no struct code
INT128_LEN = 16

# Bool bytes
BOOL_TRUE = 1
BOOL_FALSE = 0
