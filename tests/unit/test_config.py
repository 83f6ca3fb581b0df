"""Unit tests for settings validation."""

import pytest
from pydantic import ValidationError

from cluster.config import MESSAGE_COLUMN_LENGTH, InvitationSettings


class TestInvitationSettings:
    """Tests for InvitationSettings."""

    def test_message_limit_defaults_to_column_width(self):
        assert InvitationSettings().message_max_length == MESSAGE_COLUMN_LENGTH

    @pytest.mark.parametrize("limit", [0, MESSAGE_COLUMN_LENGTH + 1])
    def test_message_limit_outside_storable_range_rejected(self, limit):
        """A limit the invitations table cannot store fails at startup."""
        with pytest.raises(ValidationError):
            InvitationSettings(message_max_length=limit)

    def test_lower_message_limit_accepted(self):
        assert InvitationSettings(message_max_length=200).message_max_length == 200
