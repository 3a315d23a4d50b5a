"""Unit tests for password hashing and JWT helpers."""

import unittest

import jwt

from rollcall.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    token_user_id,
    verify_password,
)


class TestPasswordHashing(unittest.TestCase):
    def test_hash_is_not_plain_and_verifies(self) -> None:
        hashed = hash_password("correct horse")
        self.assertNotEqual(hashed, "correct horse")
        self.assertTrue(verify_password("correct horse", hashed))
        self.assertFalse(verify_password("wrong horse", hashed))

    def test_garbage_hash_does_not_verify(self) -> None:
        self.assertFalse(verify_password("anything", "not-a-bcrypt-hash"))

    def test_only_first_72_bytes_count(self) -> None:
        hashed = hash_password("x" * 72 + "tail")
        self.assertTrue(verify_password("x" * 72, hashed))


class TestAccessToken(unittest.TestCase):
    def test_round_trip_claims(self) -> None:
        token = create_access_token(sub=5, roles={"ROLE_USER", "ROLE_ADMIN"})
        payload = decode_access_token(token)
        self.assertEqual(payload["sub"], "5")
        self.assertEqual(payload["roles"], ["ROLE_ADMIN", "ROLE_USER"])
        self.assertIn("exp", payload)

    def test_tampered_token_rejected(self) -> None:
        token = create_access_token(sub=5, roles=[])
        with self.assertRaises(jwt.PyJWTError):
            decode_access_token(token + "x")

    def test_user_id_from_claims(self) -> None:
        self.assertEqual(token_user_id(decode_access_token(create_access_token(sub=7, roles=[]))), 7)
        self.assertIsNone(token_user_id({}))
        self.assertIsNone(token_user_id({"sub": "abc"}))
        self.assertIsNone(token_user_id({"sub": "0"}))
        self.assertIsNone(token_user_id({"sub": "99999999999999999999"}))


if __name__ == "__main__":
    unittest.main()
