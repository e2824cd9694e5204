# qloop/tests/test_display_demo.py
import re
import numpy as np
from qloop import demo
from qloop.display import basis_label, format_state
from qloop.register import StateVector

def test_labels_are_msb_first():
    assert basis_label(1, 3) == "001"
    assert basis_label(4, 3) == "100"
    assert basis_label(2, 2) == "10"

def test_format_ground_state():
    reg = StateVector(2)
    lines = format_state(reg.amplitudes, reg.qubit_count)
    assert lines == [
        "Quantum State:",
        "|00⟩: 1.000 + 0.000i",
        "|01⟩: 0.000 + 0.000i",
        "|10⟩: 0.000 + 0.000i",
        "|11⟩: 0.000 + 0.000i",
    ]

def test_format_does_not_mutate():
    psi = StateVector(2).apply_hadamard(1).amplitudes
    before = psi.copy()
    format_state(psi, 2, precision=5)
    assert np.array_equal(psi, before)

def test_format_shows_imaginary_part():
    lines = format_state(np.array([0.6, 0.8j]), 1)
    assert lines[2] == "|1⟩: 0.000 + 0.800i"

def test_run_demo_outcomes_match(capsys):
    r0, r1 = demo.run_demo(rng=lambda: 0.75)
    assert (r0, r1) == (1, 1)
    out = capsys.readouterr().out
    assert "After CNOT (0->1):" in out
    assert "|11⟩: 0.707 + 0.000i" in out
    assert "Measurement results: qubit0=1, qubit1=1" in out

def test_main_exits_zero(capsys):
    assert demo.main(["--seed", "3"]) == 0
    out = capsys.readouterr().out
    m = re.search(r"qubit0=(\d), qubit1=(\d)", out)
    assert m and m.group(1) == m.group(2)
    assert out.count("Quantum State:") == 4
