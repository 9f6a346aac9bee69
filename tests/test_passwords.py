"""Tests for peppered password hashing."""

import pytest

from core.errors import ValidationError
from tracker.auth import PasswordHasher


class TestHash:
    def test_digest_is_not_the_password(self, hasher):
        digest = hasher.hash('hunter2')
        assert 'hunter2' not in digest
        assert digest.startswith('pbkdf2:sha256:1000$')

    def test_salted_per_call(self, hasher):
        assert hasher.hash('same-password') != hasher.hash('same-password')

    def test_empty_password_rejected(self, hasher):
        with pytest.raises(ValidationError):
            hasher.hash('')

    def test_empty_pepper_rejected(self):
        with pytest.raises(ValueError):
            PasswordHasher(b'')

    def test_default_method_is_scrypt(self):
        digest = PasswordHasher(b'pepper').hash('pw')
        assert digest.startswith('scrypt:')

    def test_repr_hides_pepper(self, hasher):
        assert 'test-pepper' not in repr(hasher)


class TestVerify:
    def test_correct_password(self, hasher):
        digest = hasher.hash('correct horse')
        assert hasher.verify('correct horse', digest) is True

    def test_wrong_password(self, hasher):
        digest = hasher.hash('correct horse')
        assert hasher.verify('battery staple', digest) is False

    def test_pepper_is_part_of_the_digest(self, hasher):
        """A digest made with another pepper never verifies."""
        other = PasswordHasher(b'another-pepper', method='pbkdf2:sha256:1000')
        digest = other.hash('correct horse')
        assert hasher.verify('correct horse', digest) is False

    @pytest.mark.parametrize('digest', ['', 'not-a-digest', 'bogus$method', None])
    def test_malformed_digest_returns_false(self, hasher, digest):
        assert hasher.verify('anything', digest) is False

    def test_empty_password_returns_false(self, hasher):
        digest = hasher.hash('x')
        assert hasher.verify('', digest) is False
