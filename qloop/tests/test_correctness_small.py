# qloop/tests/test_correctness_small.py
import numpy as np
from qloop.apply_serial import apply_CNOT, apply_H
from qloop.circuit import Circuit
from qloop.register import StateVector
from qloop.state import State

S = 1.0 / np.sqrt(2.0)

def almost(p, q, tol=1e-9):
    return np.allclose(p, q, atol=tol, rtol=0)

def probs(psi):
    return np.abs(psi)**2

def random_state(n, seed):
    rng = np.random.default_rng(seed)
    psi = rng.normal(size=1 << n) + 1j * rng.normal(size=1 << n)
    return State(n, psi / np.linalg.norm(psi))

def test_zero_state():
    reg = StateVector(3)
    expect = np.zeros(8, dtype=complex); expect[0] = 1.0
    assert len(reg) == 8
    assert np.array_equal(reg.amplitudes, expect)

def test_h_on_zero():
    st = Circuit.empty(1).h(0).run().state
    assert np.allclose(st.as_numpy(), [0.7071, 0.7071], atol=1e-4, rtol=0)

def test_x_flips():
    # |0> -> X -> |1>
    st = Circuit.empty(1).x(0).run().state
    assert almost(probs(st.as_numpy()), [0.0, 1.0])

def test_cnot_control_off_noop():
    # |00> --(CNOT c=1,t=0)--> stays |00>
    st = Circuit.empty(2).cnot(1,0).run().state
    expect = np.zeros(4); expect[0]=1.0
    assert almost(probs(st.as_numpy()), expect)

def test_cnot_control_on_flips():
    # Prepare |10> by X on qubit 1 (control), then CNOT(1->0): |10> -> |11>
    st = Circuit.empty(2).x(1).cnot(1,0).run().state
    expect = np.zeros(4); expect[3]=1.0
    assert almost(probs(st.as_numpy()), expect)

def test_bell_state_indices():
    reg = StateVector(2)
    reg.apply_hadamard(0)
    assert almost(reg.amplitudes, [S, S, 0, 0])
    reg.apply_cnot(0, 1)
    # index 1 (q0=1) moves to index 3
    assert almost(reg.amplitudes, [S, 0, 0, S])
    assert reg.amplitudes[1] == 0 and reg.amplitudes[2] == 0

def test_normalization():
    c = Circuit.empty(3).h(0).h(1).cnot(1,0).h(2).cnot(2,0).x(1).h(1)
    st = c.run().state
    assert abs(1.0 - st.norm2()) < 1e-9

def test_normalization_complex64():
    st = Circuit.empty(2).h(0).h(1).cnot(1,0).run(dtype=np.complex64).state
    assert st.dtype == np.complex64
    st.check_normalized()

def test_h_twice_is_identity():
    for k in range(3):
        st = State.zero(3)
        apply_H(st, k); apply_H(st, k)
        assert almost(st.psi, State.zero(3).psi)

        st = random_state(3, seed=k)
        before = st.psi.copy()
        apply_H(st, k); apply_H(st, k)
        assert almost(st.psi, before)

def test_cnot_twice_is_exact_identity():
    st = random_state(4, seed=11)
    before = st.psi.copy()
    apply_CNOT(st, 3, 1)
    assert not np.array_equal(st.psi, before)
    apply_CNOT(st, 3, 1)
    assert np.array_equal(st.psi, before)

def dense_hadamard(n, k):
    H = np.array([[S, S], [S, -S]])
    ops = [np.eye(2)] * n
    ops[n - 1 - k] = H  # kron order: qubit n-1 is the leftmost factor
    M = ops[0]
    for op in ops[1:]:
        M = np.kron(M, op)
    return M

def dense_cnot(n, c, t):
    N = 1 << n
    M = np.zeros((N, N))
    for i in range(N):
        j = i ^ (1 << t) if i & (1 << c) else i
        M[j, i] = 1.0
    return M

def test_hadamard_matches_dense_matrix():
    n = 3
    for k in range(n):
        st = random_state(n, seed=100 + k)
        expect = dense_hadamard(n, k) @ st.psi
        apply_H(st, k)
        assert almost(st.psi, expect, tol=1e-12)

def test_cnot_matches_controlled_x_for_every_pair():
    n = 3
    for c in range(n):
        for t in range(n):
            if c == t:
                continue
            st = random_state(n, seed=10 * c + t)
            expect = dense_cnot(n, c, t) @ st.psi
            apply_CNOT(st, c, t)
            assert almost(st.psi, expect, tol=1e-15), (c, t)

def test_random_circuits_stay_normalized():
    rng = np.random.default_rng(7)
    n = 4
    for depth in (5, 20, 60):
        c = Circuit.empty(n)
        for _ in range(depth):
            g = rng.integers(0, 3)  # 0:H,1:X,2:CNOT
            if g == 0:
                c.h(int(rng.integers(0, n)))
            elif g == 1:
                c.x(int(rng.integers(0, n)))
            else:
                a, b = rng.choice(n, size=2, replace=False)
                c.cnot(int(a), int(b))
        st = c.run(check_norm=False).state
        assert abs(1.0 - st.norm2()) < 1e-9
