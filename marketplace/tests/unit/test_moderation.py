from unittest.mock import patch

import pytest

from marketplace.catalog.domain.services.moderation import check_content
from marketplace.models import ContentFlag


@pytest.mark.unit
class TestCheckContent:
    def test_clean_text(self):
        assert check_content("Lovely animations and clean code") == ContentFlag.NONE

    def test_profanity_is_flagged(self):
        assert check_content("this is shit") == ContentFlag.INAPPROPRIATE_LANGUAGE

    def test_empty_text(self):
        assert check_content("") == ContentFlag.NONE

    @patch("marketplace.catalog.domain.services.moderation.profanity.contains_profanity", return_value=True)
    def test_delegates_to_matcher(self, mock_contains):
        assert check_content("anything") == ContentFlag.INAPPROPRIATE_LANGUAGE
        mock_contains.assert_called_once_with("anything")
