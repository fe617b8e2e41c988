import subprocess
import sys

import pytest

from fibbench import fib
from fibbench.fib import fibonacci

SEQUENCE = [0, 1, 1, 2, 3, 5, 8, 13, 21, 34, 55]

@pytest.mark.parametrize('n', [0, 1])
def test_base_cases(n):
    assert fibonacci(n) == n

def test_known_values():
    assert fibonacci(2) == 1
    assert fibonacci(5) == 5
    assert fibonacci(10) == 55
    assert fibonacci(25) == 75025

def test_matches_sequence():
    assert [fibonacci(n) for n in range(len(SEQUENCE))] == SEQUENCE

def test_recurrence():
    for n in range(2, 20):
        assert fibonacci(n) == fibonacci(n - 1) + fibonacci(n - 2)

def test_deterministic():
    assert fibonacci(22) == fibonacci(22)

@pytest.mark.parametrize('n', [-1, -10])
def test_negative_index_rejected(n):
    with pytest.raises(ValueError):
        fibonacci(n)

def test_main_output_format(monkeypatch, capsys):
    monkeypatch.setattr(fib, 'N', 10)
    assert fib.main() == 0
    assert capsys.readouterr().out == "Fibonacci(10) = 55\n"

@pytest.mark.slow
def test_program_end_to_end():
    outputs = []
    for _ in range(2):
        proc = subprocess.run(
            [sys.executable, '-m', 'fibbench.fib'],
            capture_output=True, text=True, timeout=600
        )
        assert proc.returncode == 0
        outputs.append(proc.stdout)
    assert outputs[0] == "Fibonacci(40) = 102334155\n"
    assert outputs[0] == outputs[1]
