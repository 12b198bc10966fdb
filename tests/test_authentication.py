"""Unit tests for app.services.authentication and app.services.introspection."""

import unittest
from datetime import timedelta
from unittest.mock import patch

import jwt
from pydantic import SecretStr

from app.core.security import BcryptHashingService, JwtTokenService
from app.schemas.auth import AuthResponse, TokenConfig
from app.services.authentication import INVALID_CREDENTIALS_MESSAGE, authenticate_user
from app.services.introspection import describe_session
from app.services.registration import register_user
from app.services.results import ErrorKind, WorkflowError
from fakes import InMemoryUserStore

CONFIG = TokenConfig(
    issuer="http://test.local",
    audience="users",
    expires_in=timedelta(minutes=5),
    secret=SecretStr("test-secret-at-least-32-bytes-long!!"),
)


class AuthenticationTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.store = InMemoryUserStore()
        self.hashing = BcryptHashingService(rounds=4)
        self.tokens = JwtTokenService()
        register_user(
            {"username": "alice", "password": "Abc123!@"}, self.store, self.hashing
        )
        self.alice = self.store.users["alice"]

    def login(self, payload: object):
        return authenticate_user(payload, self.store, self.hashing, self.tokens, CONFIG)


class TestSuccessfulLogin(AuthenticationTestCase):
    def test_returns_token_with_user_claims(self) -> None:
        result = self.login({"username": "alice", "password": "Abc123!@"})
        self.assertIsInstance(result, AuthResponse)
        claims = self.tokens.decode(CONFIG, result.token)
        self.assertEqual(claims["userId"], str(self.alice.id))
        self.assertEqual(claims["username"], "alice")
        self.assertEqual(claims["iss"], CONFIG.issuer)
        self.assertEqual(claims["aud"], CONFIG.audience)

    def test_token_expiry_follows_config(self) -> None:
        result = self.login({"username": "alice", "password": "Abc123!@"})
        claims = self.tokens.decode(CONFIG, result.token)
        self.assertEqual(claims["exp"] - claims["iat"], 300)


class TestCredentialFailures(AuthenticationTestCase):
    def test_wrong_password(self) -> None:
        for password in ["Abc123!#", "abc123!@", "", "Abc123!@ "]:
            with self.subTest(password=password):
                result = self.login({"username": "alice", "password": password})
                self.assertIsInstance(result, WorkflowError)
                self.assertEqual(result.kind, ErrorKind.CREDENTIALS)
                self.assertEqual(result.message, INVALID_CREDENTIALS_MESSAGE)

    def test_unknown_user_is_indistinguishable_from_wrong_password(self) -> None:
        unknown = self.login({"username": "mallory", "password": "Abc123!@"})
        wrong = self.login({"username": "alice", "password": "nope"})
        self.assertEqual(unknown, wrong)

    def test_unknown_user_still_runs_a_hash_check(self) -> None:
        with patch.object(self.hashing, "verify", wraps=self.hashing.verify) as verify:
            result = self.login({"username": "mallory", "password": "Abc123!@"})
        self.assertEqual(result.kind, ErrorKind.CREDENTIALS)
        verify.assert_called_once()
        checked = verify.call_args.args[1]
        self.assertEqual(checked, self.hashing.decoy_hash())

    def test_decoy_hash_matches_no_password_and_is_reused(self) -> None:
        decoy = self.hashing.decoy_hash()
        self.assertIs(decoy, self.hashing.decoy_hash())
        self.assertFalse(self.hashing.verify("Abc123!@", decoy))
        self.assertTrue(decoy.salt.startswith("$2b$04$"))

    def test_malformed_body(self) -> None:
        result = self.login({"user": "alice"})
        self.assertEqual(result.kind, ErrorKind.MALFORMED_REQUEST)

    def test_unencodable_password_is_malformed(self) -> None:
        result = self.login({"username": "alice", "password": "Abc123!\ud800"})
        self.assertEqual(result.kind, ErrorKind.MALFORMED_REQUEST)


class TestTokenValidation(AuthenticationTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.token = self.login({"username": "alice", "password": "Abc123!@"}).token

    def test_other_secret_rejected(self) -> None:
        other = CONFIG.model_copy(update={"secret": SecretStr("another-secret-at-least-32-bytes!!")})
        with self.assertRaises(jwt.PyJWTError):
            self.tokens.decode(other, self.token)

    def test_other_audience_rejected(self) -> None:
        other = CONFIG.model_copy(update={"audience": "admins"})
        with self.assertRaises(jwt.InvalidAudienceError):
            self.tokens.decode(other, self.token)

    def test_other_issuer_rejected(self) -> None:
        other = CONFIG.model_copy(update={"issuer": "http://elsewhere"})
        with self.assertRaises(jwt.InvalidIssuerError):
            self.tokens.decode(other, self.token)

    def test_expired_token_rejected(self) -> None:
        expired = CONFIG.model_copy(update={"expires_in": timedelta(seconds=-1)})
        token = self.tokens.generate(expired)
        with self.assertRaises(jwt.ExpiredSignatureError):
            self.tokens.decode(CONFIG, token)


class TestDescribeSession(unittest.TestCase):
    def test_projects_claims(self) -> None:
        self.assertEqual(
            describe_session({"userId": "7", "username": "alice", "exp": 0}),
            "id: 7\nusername: alice",
        )
