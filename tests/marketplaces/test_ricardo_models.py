"""
ricardo.ch model tests
"""

from datetime import datetime, timezone

import pytest

from storelink.marketplaces.ricardo.models import (
    InsertArticleRequest,
    PictureInformation,
    RicardoTokenCredential,
    parse_ricardo_date,
)


class TestParseRicardoDate:
    @pytest.mark.parametrize(
        "value",
        [
            "/Date(1700000000000)/",
            "/Date(1700000000000+0100)/",
            "2023-11-14T22:13:20Z",
            "2023-11-14T23:13:20+01:00",
            "2023-11-14T22:13:20",
        ],
    )
    def test_formats(self, value):
        assert parse_ricardo_date(value) == datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value", [None, "", "tomorrow", "/Date(abc)/"])
    def test_unparseable(self, value):
        assert parse_ricardo_date(value) is None


class TestTokenCredential:
    def test_parsed_from_pascal_case(self):
        token = RicardoTokenCredential.model_validate(
            {"TokenCredential": "abc", "TokenExpirationDate": "/Date(1700000000000)/", "SessionDuration": 30}
        )

        assert token.token_credential == "abc"
        assert token.session_duration == 30

    def test_expiry(self):
        token = RicardoTokenCredential(token_credential="abc", token_expiration_date="2023-11-14T22:13:20Z")

        assert token.is_expired(now=datetime(2023, 11, 14, 22, 0, tzinfo=timezone.utc)) is False
        assert token.is_expired(now=datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)) is True

    def test_missing_date_counts_as_expired(self):
        assert RicardoTokenCredential(token_credential="abc").is_expired() is True
        assert RicardoTokenCredential(token_credential="abc", token_expiration_date="soon").is_expired() is True


class TestInsertArticlePayload:
    def test_defaults(self):
        payload = InsertArticleRequest(
            category_id=1,
            article_title="Title",
            article_description="Description",
            start_price=10.0,
            pictures=[PictureInformation(picture_url="/p.jpeg", picture_index=0)],
        ).to_payload()

        assert payload["ArticleConditionId"] == 1
        assert payload["Availability"] == 1
        assert payload["MaxNumberOfPictures"] == 10
        assert payload["ArticleDuration"] == 7
        assert payload["IsCustomerTemplate"] is False
        assert payload["Pictures"] == [{"PictureUrl": "/p.jpeg", "PictureIndex": 0}]
        assert payload["DeliveryConditionIds"] == {"DeliveryConditionId": [1]}
        assert payload["WarrantyConditionIds"] == {"WarrantyConditionId": [1]}
