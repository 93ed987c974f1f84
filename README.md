# sonicproofs

Building blocks for Sonic-style zero-knowledge arguments: a structured
reference string (SRS), Kate-style polynomial commitments and openings,
Fiat–Shamir transcripts, and the "unhelped" sub-arguments used to evaluate
`s(z, y)` without a helper.

All group arithmetic runs on `DummyEngine`, a toy engine over the prime
field of order 64513 in which group elements are field elements, scalar
multiplication is field multiplication and the pairing is the product of its
arguments (kept in additive form, so a pairing check asks for a zero sum).
It makes every algorithm runnable and checkable, but it offers no security.

## Install

```
pip install sonicproofs
pip install "sonicproofs[test]"   # with pytest and hypothesis
```

## Modules

- `sonicproofs.field`: the field element `Fr` (arithmetic operators,
  `inverse`, `pow`, `sqrt`, `legendre`, `to_bytes` / `from_bytes`),
  `LegendreSymbol`, `FieldDecodingError` and `DummyEngine`
  (`miller_loop`, `final_exponentiation`, `pairing_check`).
- `sonicproofs.source`: `BaseSource`, which reads bases one at a time,
  `FullDensity` and `DensityTracker`, and the exceptions
  `SynthesisError`, `UnexpectedIdentityError` and `AssignmentMissingError`.
- `sonicproofs.srs`: `SRS.dummy`, `SRS.generate`, and binary
  `SRS.write` / `SRS.read` (a big-endian `u32` degree followed by every
  point as 8 big-endian bytes).
- `sonicproofs.util`: `multiexp`, `multiexp_serial`, `kate_division`,
  `polynomial_commitment`, `polynomial_commitment_opening`,
  `check_polynomial_commitment`, FFT-based `multiply_polynomials` and
  `multiply_polynomials_serial`, in-place helpers (`add_polynomials`,
  `mul_polynomial_by_scalar`, `mul_add_polynomials`,
  `distribute_consecutive_powers`), evaluation at consecutive powers, and
  `require_assignment`.
- `sonicproofs.transcript`: `BlakeHasher`, `Keccak256Hasher`,
  `RollingHashTranscript` and `Transcript` (Keccak-256).
- `sonicproofs.wellformed`: `WellformednessArgument` and
  `WellformednessProof`.
- `sonicproofs.s2_proof`: `S2Eval` and `S2Proof`.
- `sonicproofs.grand_product`: `GrandProductArgument` and
  `GrandProductProof`.
- `sonicproofs.permutation`: `PermutationArgument`, `SpecializedSRS`,
  `PermutationProof`, `Proof` and `permute`.

## Example: commit to a polynomial and open it

The commitment covers `f(X) = c_0 + c_1 X + ... + c_n X^n`; the opening is
made for `f(X) - f(z)`.

```python
from sonicproofs.field import DummyEngine, Fr
from sonicproofs.srs import SRS
from sonicproofs.util import (
    check_polynomial_commitment,
    evaluate_at_consecutive_powers,
    polynomial_commitment,
    polynomial_commitment_opening,
)

engine = DummyEngine()
srs = SRS.generate(16, Fr.from_int(23923), Fr.from_int(23728792), engine)

coeffs = [Fr.from_int(c) for c in (3, 1, 4, 1, 5)]
n = len(coeffs) - 1
commitment = polynomial_commitment(n, 0, n, srs, coeffs)

z = Fr.from_int(2000)
value = evaluate_at_consecutive_powers(coeffs, Fr.one(), z)
opening = polynomial_commitment_opening(0, n, [coeffs[0] - value, *coeffs[1:]], z, srs)

assert check_polynomial_commitment(commitment, z, value, opening, n, srs)
```

## Example: wellformedness argument

```python
from sonicproofs.field import DummyEngine, Fr
from sonicproofs.srs import SRS
from sonicproofs.wellformed import WellformednessArgument

engine = DummyEngine()
srs = SRS.dummy(64, Fr.from_int(23923), Fr.from_int(23728792), engine)

coeffs = [Fr.from_int(i + 1) for i in range(8)]
argument = WellformednessArgument([coeffs])
commitments = argument.commit(srs)
challenges = [Fr.from_int(7)]
proof = argument.make_argument(challenges, srs)

assert WellformednessArgument.verify(len(coeffs), challenges, commitments, proof, srs)
```

## Errors

- `BaseSource` raises `SynthesisError` when it runs out of bases and
  `UnexpectedIdentityError` when the next base is the point at infinity.
- `require_assignment` raises `AssignmentMissingError` for `None`.
- `SRS.read` raises `EOFError` on truncated input and `ValueError` for an
  invalid point or a point at infinity; `SRS.write` raises `ValueError`
  when the point lists do not match the degree.
- Building an `Fr` out of range raises `FieldDecodingError`; inverting zero
  raises `ZeroDivisionError`.
- Mismatched lengths of inputs raise `ValueError`; the prover steps of the
  grand product and permutation arguments raise `ArithmeticError` when an
  internal consistency check fails.

## What this package does not do

There is no constraint-system or circuit layer, no full prover or verifier
for circuits, no real pairing-friendly curve and no command-line tool. The
package provides the commitment scheme, the transcript and the sub-arguments
as library functions only.