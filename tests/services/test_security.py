import pytest

from passage.models.errors import StateValidationError
from passage.models.values import CsrfToken
from passage.services.security import generate_state, validate_state


class TestGenerateState:
    def test_default_state_has_128_bits(self) -> None:
        # Act
        state = generate_state()

        # Assert - 16 bytes base64url-encoded without padding
        assert isinstance(state, CsrfToken)
        assert len(state.secret()) == 22
        assert "=" not in state.secret()

    def test_custom_length(self) -> None:
        # Act
        state = generate_state(32)

        # Assert
        assert len(state.secret()) == 43

    def test_states_are_unique(self) -> None:
        # Act
        states = {generate_state().secret() for _ in range(50)}

        # Assert
        assert len(states) == 50


class TestValidateState:
    def test_matching_state_passes(self) -> None:
        # Arrange
        expected = CsrfToken("abc123")

        # Act & Assert - no exception
        validate_state(expected, "abc123")
        validate_state(expected, CsrfToken("abc123"))

    def test_mismatched_state_raises(self) -> None:
        # Act & Assert
        with pytest.raises(StateValidationError, match="mismatch"):
            validate_state(CsrfToken("abc123"), "abc124")

    def test_missing_state_raises(self) -> None:
        # Act & Assert
        with pytest.raises(StateValidationError, match="missing"):
            validate_state(CsrfToken("abc123"), None)
