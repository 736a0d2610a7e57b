"""Obtain one GitHub token that is known to work.

Flow:
1. Look for a stored token; if found, offer reuse / new / guide
2. Otherwise (or on request) ask the operator for a token
3. Validate it; a rejected token is deleted wherever it was stored
4. Repeat 2-3 until the attempt ceiling is reached

A token reused from the secure directory is trusted without a probe. It was
written there only after passing validation in an earlier run, but it may
have been revoked since; the download step is what catches that case.
"""

import time
from typing import Callable

from credential import AttemptCounter, Credential, clean_token, mask_token
from errors import AcquisitionExhausted, UserCancelled
from persistor import SecurePersistor
from report import log_error, log_info, log_step, log_success, log_warning
from token_locator import TokenLocator
from token_validator import TokenValidator
from wizard import EXISTING_TOKEN_CHOICES, GUIDE, REPLACE, Prompter, token_guide


class TokenAcquirer:
    def __init__(
        self,
        locator: TokenLocator,
        validator: TokenValidator,
        persistor: SecurePersistor,
        prompter: Prompter,
        hostname: str = "",
        token_prefix: str = "ghp_",
        max_attempts: int = 3,
        retry_backoff: float = 0.0,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.locator = locator
        self.validator = validator
        self.persistor = persistor
        self.prompter = prompter
        self.hostname = hostname
        self.token_prefix = token_prefix
        self.attempts = AttemptCounter(ceiling=max_attempts)
        self.retry_backoff = retry_backoff
        self._sleep = sleep

    def acquire(self) -> Credential:
        """Return a usable token.

        Raises:
            AcquisitionExhausted: every attempt up to the ceiling was rejected
            UserCancelled: the operator aborted a prompt
        """
        log_step("GitHub Token Setup")

        found = self.locator.find()
        if found is not None:
            reused = self._offer_reuse(found)
            if reused is not None:
                return reused

        return self._enter_until_valid()

    def _offer_reuse(self, found: Credential) -> Credential | None:
        log_info(f"Found existing token {mask_token(found.value)} in {found.source}")

        while True:
            choice = self.prompter.choose(
                "An existing token was found. What would you like to do?",
                EXISTING_TOKEN_CHOICES,
            )
            if choice is None:
                raise UserCancelled()
            if choice == GUIDE:
                self.prompter.show_text(token_guide(self.hostname, self.token_prefix))
                continue
            break

        if choice == REPLACE:
            return None

        # Anything else, including an unknown answer, keeps the existing token
        if found.trusted:
            log_success("Using previously secured token")
            return found

        if self._check(found):
            return found
        return None

    def _enter_until_valid(self) -> Credential:
        if self.attempts.exhausted:
            raise AcquisitionExhausted(self.attempts.count)

        self.prompter.show_text(token_guide(self.hostname, self.token_prefix))

        while not self.attempts.exhausted:
            candidate = self._ask_candidate()
            if self._check(candidate):
                return candidate
            if not self.attempts.exhausted and self.retry_backoff > 0:
                self._sleep(self.retry_backoff * self.attempts.count)

        raise AcquisitionExhausted(self.attempts.count)

    def _ask_candidate(self) -> Credential:
        """Prompt until the operator gives a non-empty token they stand by."""
        while True:
            raw = self.prompter.ask_secret("Enter your GitHub token:")
            if raw is None:
                raise UserCancelled()

            value = clean_token(raw)
            if not value:
                log_warning("Token cannot be empty. Please try again.")
                continue

            if not value.startswith(self.token_prefix):
                log_warning(
                    f"Token should start with '{self.token_prefix}' (classic token)",
                )
                proceed = self.prompter.ask_yes_no("Continue anyway?", default=False)
                if proceed is None:
                    raise UserCancelled()
                if not proceed:
                    continue

            return Credential(value)

    def _check(self, candidate: Credential) -> bool:
        """Validate once; on rejection delete stored copies and count the attempt."""
        log_info("Validating token...")
        result = self.validator.validate(candidate)
        if result.valid:
            log_success(f"Token accepted ({result.describe()})")
            return True

        removed = self.persistor.discard(candidate)
        for path in removed:
            log_info(f"Removed rejected token from {path}")
        self.attempts.record_failure(result.describe())
        log_error(
            f"Token rejected ({result.describe()}), "
            f"attempt {self.attempts.count}/{self.attempts.ceiling}",
        )
        return False
