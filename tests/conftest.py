# tests/conftest.py
import pytest

# 'g++ -I. -E d.cpp e.cpp' on:
#   a.h:   #ifndef A_H / #define A_H / void a3(); / (blank) / #endif
#   b.h:   #ifndef B_H / #define B_H / (blank) / void b4(); / (blank) / #endif
#   c.h:   #ifndef C_H / #define C_H / #include "a.h" / 8 blank lines / #include "b.h" / void c13(); / ...
#   d.cpp: #include "c.h" / void d2();
#   e.cpp: void e1();
GCC_OUTPUT = [
    '# 0 "d.cpp"',
    '# 0 "<built-in>"',
    '# 0 "<command-line>"',
    '# 1 "/usr/include/stdc-predef.h" 1 3 4',
    '# 0 "<command-line>" 2',
    '# 1 "d.cpp"',
    '# 1 "c.h" 1',
    '',
    '',
    '# 1 "a.h" 1',
    '',
    '',
    'void a3();',
    '# 4 "c.h" 2',
    '# 12 "c.h"',
    '# 1 "b.h" 1',
    '',
    '',
    '',
    'void b4();',
    '# 13 "c.h" 2',
    'void c13();',
    '# 2 "d.cpp" 2',
    'void d2();',
    '# 0 "e.cpp"',
    '# 0 "<built-in>"',
    '# 0 "<command-line>"',
    '# 1 "/usr/include/stdc-predef.h" 1 3 4',
    '# 0 "<command-line>" 2',
    '# 1 "e.cpp"',
    'void e1();',
]

@pytest.fixture
def gcc_output():
    """Preprocessor output of a two-file translation unit, one line per item."""
    return list(GCC_OUTPUT)

@pytest.fixture
def preprocessed_file(tmp_path):
    """The same output written to disk, as 'g++ -E ... > out.i' would."""
    path = tmp_path / "out.i"
    path.write_text("\n".join(GCC_OUTPUT) + "\n", encoding="utf-8")
    return path
