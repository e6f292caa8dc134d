import logging
import string

import numpy as np

logger = logging.getLogger(__name__)

ALPHABET_SIZE = 26

# English letter frequencies, a..z
ENGLISH_FREQUENCIES = np.array([
    0.08167, 0.01492, 0.02782, 0.04253, 0.12702, 0.02228, 0.02015,
    0.06094, 0.06966, 0.00153, 0.00772, 0.04025, 0.02406, 0.06749,
    0.07507, 0.01929, 0.00095, 0.05987, 0.06327, 0.09056, 0.02758,
    0.00978, 0.02360, 0.00150, 0.01974, 0.00074,
])
ENGLISH_FREQUENCIES.flags.writeable = False

# ==================== Normalization ====================

class LowercaseText:
    """Letters a-z stored as their alphabet positions (0-25).

    Instances are immutable; every transform returns a new one.
    """

    def __init__(self, indices=()):
        values = np.asarray(indices, dtype=np.int64).reshape(-1)
        if values.size and (values.min() < 0 or values.max() >= ALPHABET_SIZE):
            raise ValueError(
                f"Letter indices must be in 0..{ALPHABET_SIZE - 1}; "
                "use LowercaseText.from_indices to wrap them."
            )
        arr = values.astype(np.uint8)
        arr.flags.writeable = False
        self._indices = arr

    @classmethod
    def coerce(cls, raw):
        """Drop everything that is not an ASCII letter and lowercase the rest."""
        letters = [ch.lower() for ch in raw if ch in string.ascii_letters]
        return cls([ord(ch) - ord('a') for ch in letters])

    @classmethod
    def from_indices(cls, indices):
        return cls(np.asarray(indices, dtype=np.int64).reshape(-1) % ALPHABET_SIZE)

    def to_indices(self):
        return self._indices.tolist()

    def letter_counts(self):
        return np.bincount(self._indices, minlength=ALPHABET_SIZE)

    def letter_frequencies(self):
        counts = self.letter_counts()
        total = len(self)
        if total == 0:
            return np.zeros(ALPHABET_SIZE)
        return counts / total

    def caesar_shift(self, shift):
        shift = shift % ALPHABET_SIZE
        return LowercaseText.from_indices(self._indices.astype(np.int64) + shift)

    def __len__(self):
        return len(self._indices)

    def __iter__(self):
        return iter(self.to_indices())

    def __eq__(self, other):
        if not isinstance(other, LowercaseText):
            return NotImplemented
        return np.array_equal(self._indices, other._indices)

    def __hash__(self):
        return hash(self._indices.tobytes())

    def __str__(self):
        return ''.join(string.ascii_lowercase[i] for i in self._indices)

    def __repr__(self):
        return f"<LowercaseText {str(self)!r}>"


def normalize(raw):
    return LowercaseText.coerce(raw)

def render(text):
    return str(text)

# ==================== Frequency Scoring ====================

def chi_squared(observed, expected):
    """Sum of (o - e)^2 / e over two sequences of equal length."""
    observed = np.asarray(observed, dtype=float)
    expected = np.asarray(expected, dtype=float)
    if observed.shape != expected.shape:
        raise ValueError(
            f"Distributions differ in length ({observed.size} vs {expected.size})."
        )
    return float(np.sum((observed - expected) ** 2 / expected))

def english_score(text):
    """Chi-squared distance from English; lower is more English-like.

    Accepts a LowercaseText or a raw string, which is normalized first.
    A text with no letters scores +inf so it can never be the best candidate.
    """
    if isinstance(text, str):
        text = normalize(text)
    if len(text) == 0:
        return float('inf')
    return chi_squared(text.letter_frequencies(), ENGLISH_FREQUENCIES)

# ==================== Classical Ciphers ====================

def caesar_encrypt(text, shift=3):
    return render(normalize(text).caesar_shift(shift))

def caesar_decrypt(text, shift=3):
    return caesar_encrypt(text, ALPHABET_SIZE - (shift % ALPHABET_SIZE))

def _vigenere(text, keyword, decrypt):
    text = normalize(text)
    key = normalize(keyword)
    if len(key) == 0:
        # No letters in the keyword: text passes through untouched
        logger.debug("Vigenere keyword %r has no letters", keyword)
        return render(text)

    key_indices = key.to_indices()
    result = []
    for i, c in enumerate(text.to_indices()):
        k = key_indices[i % len(key_indices)]
        shift = (ALPHABET_SIZE - k) % ALPHABET_SIZE if decrypt else k
        result.append((c + shift) % ALPHABET_SIZE)
    return render(LowercaseText(result))

def vigenere_encrypt(text, key):
    return _vigenere(text, key, decrypt=False)

def vigenere_decrypt(text, key):
    return _vigenere(text, key, decrypt=True)

# ==================== ATTACK HELPERS ====================

# Score every rotation against English and keep the minimum chi-squared
def attack_caesar(ciphertext):
    text = normalize(ciphertext)
    best = {"shift": 0, "plaintext": render(text), "score": float('inf')}
    for s in range(ALPHABET_SIZE):
        candidate = text.caesar_shift(s)
        sc = english_score(candidate)
        # strict comparison keeps the lowest shift on ties
        if sc < best["score"]:
            best = {
                "shift": (ALPHABET_SIZE - s) % ALPHABET_SIZE,
                "plaintext": render(candidate),
                "score": sc,
            }
    logger.debug("Caesar attack: shift=%d score=%s", best["shift"], best["score"])
    return best

def solve_caesar(ciphertext):
    return attack_caesar(ciphertext)["plaintext"]
