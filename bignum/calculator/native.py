"""Calculator implemented with chunked long arithmetic.

No arbitrary-precision primitive is used on large operands. Magnitudes are
split into little-endian lists of base 10**9 chunks, and every intermediate
value produced while combining chunks stays below 10**18 (well under the
signed 64-bit limit of 2**63), so the algorithms would run unchanged on
fixed-width machine words.

Layout example for 1234567891234567889999999:

    chunks = [889999999, 891234567, 1234567]
              ^ least significant       ^ most significant
"""

from __future__ import annotations

from typing import ClassVar

from bignum.calculator.base import Calculator

__all__ = ["NativeCalculator", "CHUNK_DIGITS", "BASE", "MAX_DIGITS"]

# Decimal digits per chunk
CHUNK_DIGITS = 9
BASE = 10**CHUNK_DIGITS

# Operands with at most this many digits fit a signed 64-bit word, sums included:
# 2 * (10**18 - 1) < 2**63 - 1.
MAX_DIGITS = 18

Chunks = list[int]


class NativeCalculator(Calculator):
    """Calculator implementation using only word-sized arithmetic.

    Short operands take a word-size fast path; everything else goes through
    the schoolbook chunk algorithms below.
    """

    name: ClassVar[str] = "native"

    def add(self, a: str, b: str) -> str:
        if a == "0":
            return b
        if b == "0":
            return a

        a_neg = a[0] == "-"
        b_neg = b[0] == "-"
        a_dig = a[1:] if a_neg else a
        b_dig = b[1:] if b_neg else b

        if len(a_dig) <= MAX_DIGITS and len(b_dig) <= MAX_DIGITS:
            return str(int(a) + int(b))

        x = _to_chunks(a_dig)
        y = _to_chunks(b_dig)

        if a_neg == b_neg:
            result = _from_chunks(_add_chunks(x, y))
            return "-" + result if a_neg else result

        cmp = _cmp_chunks(x, y)
        if cmp == 0:
            return "0"

        # Subtract the smaller magnitude from the larger, keep the larger's sign
        if cmp > 0:
            result = _from_chunks(_sub_chunks(x, y))
            return "-" + result if a_neg else result

        result = _from_chunks(_sub_chunks(y, x))
        return "-" + result if b_neg else result

    def sub(self, a: str, b: str) -> str:
        return self.add(a, self.neg(b))

    def mul(self, a: str, b: str) -> str:
        if a == "0" or b == "0":
            return "0"
        if a == "1":
            return b
        if b == "1":
            return a
        if a == "-1":
            return self.neg(b)
        if b == "-1":
            return self.neg(a)

        a_neg = a[0] == "-"
        b_neg = b[0] == "-"
        a_dig = a[1:] if a_neg else a
        b_dig = b[1:] if b_neg else b

        if len(a_dig) + len(b_dig) <= MAX_DIGITS:
            return str(int(a) * int(b))

        result = _from_chunks(_mul_chunks(_to_chunks(a_dig), _to_chunks(b_dig)))
        return "-" + result if a_neg != b_neg else result

    def _div_qr(self, a: str, b: str) -> tuple[str, str]:
        if a == "0":
            return "0", "0"
        if a == b:
            return "1", "0"
        if b == "1":
            return a, "0"
        if b == "-1":
            return self.neg(a), "0"

        a_neg = a[0] == "-"
        b_neg = b[0] == "-"
        a_dig = a[1:] if a_neg else a
        b_dig = b[1:] if b_neg else b

        if len(a_dig) <= MAX_DIGITS and len(b_dig) <= MAX_DIGITS:
            q_mag, r_mag = divmod(int(a_dig), int(b_dig))
            q = str(q_mag)
            r = str(r_mag)
        else:
            q_chunks, r_chunks = _divmod_chunks(_to_chunks(a_dig), _to_chunks(b_dig))
            q = _from_chunks(q_chunks)
            r = _from_chunks(r_chunks)

        # Truncation: quotient sign from both operands, remainder follows the dividend
        if a_neg != b_neg:
            q = self.neg(q)
        if a_neg:
            r = self.neg(r)

        return q, r

    def _pow(self, a: str, e: int) -> str:
        negative = a[0] == "-"
        base = _to_chunks(a[1:] if negative else a)
        negative = negative and e % 2 == 1
        result: Chunks = [1]

        # Right-to-left binary exponentiation
        while True:
            if e & 1:
                result = _mul_chunks(result, base)
            e >>= 1
            if not e:
                break
            base = _mul_chunks(base, base)

        value = _from_chunks(result)
        return "-" + value if negative else value

    def _mod_pow(self, base: str, exp: str, mod: str) -> str:
        m = _to_chunks(mod)
        b = _to_chunks(self.mod(base, mod))
        e = _to_chunks(exp)
        result: Chunks = [1]

        while not _is_zero(e):
            e, bit = _divmod_small(e, 2)
            if bit:
                result = _divmod_chunks(_mul_chunks(result, b), m)[1]
            if not _is_zero(e):
                b = _divmod_chunks(_mul_chunks(b, b), m)[1]

        return _from_chunks(result)

    def _sqrt(self, n: str) -> str:
        target = _to_chunks(n)

        # 10**ceil(d/2) is strictly above the root; Newton's iteration then
        # decreases monotonically until it reaches floor(sqrt(n)).
        x = _to_chunks("1" + "0" * ((len(n) + 1) // 2))

        while True:
            quotient, _ = _divmod_chunks(target, x)
            y, _ = _divmod_small(_add_chunks(x, quotient), 2)
            if _cmp_chunks(y, x) >= 0:
                return _from_chunks(x)
            x = y

    def gcd(self, a: str, b: str) -> str:
        x = _to_chunks(self.abs(a))
        y = _to_chunks(self.abs(b))

        while not _is_zero(y):
            x, y = y, _divmod_chunks(x, y)[1]

        return _from_chunks(x)


# =============================================================================
# Chunk helpers
#
# All helpers take and return little-endian chunk lists without high zero
# chunks (zero is [0]). Inputs are never mutated.
# =============================================================================


def _to_chunks(digits: str) -> Chunks:
    """Split an unsigned decimal string into base 10**9 chunks."""
    length = len(digits)
    chunks = [0] * ((length + CHUNK_DIGITS - 1) // CHUNK_DIGITS)
    end = length
    for i in range(len(chunks)):
        start = end - CHUNK_DIGITS if end > CHUNK_DIGITS else 0
        chunks[i] = int(digits[start:end])
        end = start
    return _trim(chunks)


def _from_chunks(chunks: Chunks) -> str:
    """Join chunks back into a canonical unsigned decimal string."""
    top = len(chunks) - 1
    while top > 0 and chunks[top] == 0:
        top -= 1
    parts = [str(chunks[top])]
    parts.extend(f"{chunks[i]:09d}" for i in range(top - 1, -1, -1))
    return "".join(parts)


def _trim(chunks: Chunks) -> Chunks:
    """Drop high zero chunks in place, keeping at least one chunk."""
    while len(chunks) > 1 and chunks[-1] == 0:
        chunks.pop()
    if not chunks:
        chunks.append(0)
    return chunks


def _is_zero(chunks: Chunks) -> bool:
    return len(chunks) == 1 and chunks[0] == 0


def _cmp_chunks(a: Chunks, b: Chunks) -> int:
    if len(a) != len(b):
        return -1 if len(a) < len(b) else 1
    for i in range(len(a) - 1, -1, -1):
        if a[i] != b[i]:
            return -1 if a[i] < b[i] else 1
    return 0


def _add_chunks(a: Chunks, b: Chunks) -> Chunks:
    """Magnitude sum; the result grows by at most one chunk."""
    if len(a) < len(b):
        a, b = b, a

    result = [0] * (len(a) + 1)
    carry = 0

    for i in range(len(b)):
        s = a[i] + b[i] + carry
        if s >= BASE:
            result[i] = s - BASE
            carry = 1
        else:
            result[i] = s
            carry = 0

    for i in range(len(b), len(a)):
        s = a[i] + carry
        if s >= BASE:
            result[i] = s - BASE
            carry = 1
        else:
            result[i] = s
            carry = 0

    result[len(a)] = carry
    return _trim(result)


def _sub_chunks(a: Chunks, b: Chunks) -> Chunks:
    """Magnitude difference a - b, requires a >= b."""
    result = [0] * len(a)
    borrow = 0

    for i in range(len(a)):
        d = a[i] - borrow - (b[i] if i < len(b) else 0)
        if d < 0:
            result[i] = d + BASE
            borrow = 1
        else:
            result[i] = d
            borrow = 0

    return _trim(result)


def _mul_chunks(a: Chunks, b: Chunks) -> Chunks:
    """Schoolbook product into a buffer of len(a) + len(b) chunks."""
    if _is_zero(a) or _is_zero(b):
        return [0]

    result = [0] * (len(a) + len(b))

    for i, ai in enumerate(a):
        if ai == 0:
            continue
        carry = 0
        k = i
        for bj in b:
            # Bounded by (BASE-1) + (BASE-1)**2 + (BASE-1) = BASE**2 - 1
            t = result[k] + ai * bj + carry
            carry = t // BASE
            result[k] = t - carry * BASE
            k += 1
        # Row i never reached position i + len(b) before
        result[k] = carry

    return _trim(result)


def _mul_small(a: Chunks, m: int) -> Chunks:
    """Multiply by a single chunk (0 <= m < BASE). Keeps the extra top chunk."""
    result = [0] * (len(a) + 1)
    carry = 0
    for i, ai in enumerate(a):
        t = ai * m + carry
        carry = t // BASE
        result[i] = t - carry * BASE
    result[len(a)] = carry
    return result


def _divmod_small(a: Chunks, d: int) -> tuple[Chunks, int]:
    """Short division by a single chunk (0 < d < BASE)."""
    quotient = [0] * len(a)
    rem = 0
    for i in range(len(a) - 1, -1, -1):
        # rem < d, so cur < d * BASE <= BASE**2
        cur = rem * BASE + a[i]
        q = cur // d
        quotient[i] = q
        rem = cur - q * d
    return _trim(quotient), rem


def _divmod_chunks(a: Chunks, b: Chunks) -> tuple[Chunks, Chunks]:
    """Long division of magnitudes (Knuth, TAOCP vol. 2, 4.3.1, algorithm D).

    Requires b != 0. Returns (quotient, remainder).
    """
    if _cmp_chunks(a, b) < 0:
        return [0], a[:]

    if len(b) == 1:
        quotient, rem = _divmod_small(a, b[0])
        return quotient, [rem]

    # Normalize so the divisor's top chunk is at least BASE // 2: quotient
    # chunk estimates are then never more than two too large.
    shift = BASE // (b[-1] + 1)
    u = _mul_small(a, shift)
    v = _trim(_mul_small(b, shift))

    n = len(v)
    m = len(a) - n
    quotient = [0] * (m + 1)
    v_top = v[n - 1]
    v_next = v[n - 2]

    for j in range(m, -1, -1):
        # Estimate from the top two chunks of the current window
        num = u[j + n] * BASE + u[j + n - 1]
        qhat = num // v_top
        rhat = num - qhat * v_top

        while qhat >= BASE or qhat * v_next > rhat * BASE + u[j + n - 2]:
            qhat -= 1
            rhat += v_top
            if rhat >= BASE:
                break

        # Multiply and subtract qhat * v from the window
        borrow = 0
        carry = 0
        for i in range(n):
            p = qhat * v[i] + carry
            carry = p // BASE
            t = u[i + j] - (p - carry * BASE) - borrow
            if t < 0:
                u[i + j] = t + BASE
                borrow = 1
            else:
                u[i + j] = t
                borrow = 0

        t = u[j + n] - carry - borrow
        if t < 0:
            # qhat was one too large: add the divisor back
            qhat -= 1
            carry = 0
            for i in range(n):
                s = u[i + j] + v[i] + carry
                if s >= BASE:
                    u[i + j] = s - BASE
                    carry = 1
                else:
                    u[i + j] = s
                    carry = 0
            u[j + n] = t + carry
        else:
            u[j + n] = t

        quotient[j] = qhat

    remainder, _ = _divmod_small(_trim(u[:n]), shift)
    return _trim(quotient), remainder
