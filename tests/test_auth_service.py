"""Tests for authentication service"""

from fieldops.services.auth_service import AuthService


class TestPasswordHashing:
    """Test password hashing and verification"""

    def test_hash_password(self):
        """Test password hashing generates a hash"""
        password = "TestPassword123!"
        hashed = AuthService.hash_password(password)

        assert hashed is not None
        assert hashed != password
        assert hashed.startswith("$2b$12$")  # bcrypt prefix, 12 rounds

    def test_verify_password_correct(self):
        """Test password verification with correct password"""
        password = "TestPassword123!"
        hashed = AuthService.hash_password(password)

        assert AuthService.verify_password(password, hashed) is True

    def test_verify_password_incorrect(self):
        """Test password verification with incorrect password"""
        password = "TestPassword123!"
        hashed = AuthService.hash_password(password)

        assert AuthService.verify_password("WrongPassword", hashed) is False

    def test_hash_same_password_different_hashes(self):
        """Test that hashing the same password twice produces different hashes (due to salt)"""
        password = "TestPassword123!"
        hash1 = AuthService.hash_password(password)
        hash2 = AuthService.hash_password(password)

        assert hash1 != hash2
        # But both should verify correctly
        assert AuthService.verify_password(password, hash1) is True
        assert AuthService.verify_password(password, hash2) is True

    def test_verify_password_empty_hash(self):
        """Test an account without a stored hash never verifies"""
        assert AuthService.verify_password("anything", "") is False

    def test_verify_password_malformed_hash(self):
        """Test a corrupt stored hash is treated as a mismatch"""
        assert AuthService.verify_password("anything", "not-a-bcrypt-hash") is False
