import pytest
from decimal import Decimal
from unittest.mock import MagicMock

from apps.exchange.domain.errors import OutOfRangeError
from apps.exchange.domain.favorites import FavoriteAddResult, FavoritesList
from apps.exchange.domain.models import FavoritePair
from apps.exchange.domain.services import CurrencyConverterService


@pytest.fixture
def favorites(registry):
    return FavoritesList(registry)


class TestFavoritesList:
    """Tests for the session favorites list."""

    def test_add(self, favorites):
        """Test add stores the pair in canonical form."""
        result = favorites.add("usd", "eur")

        assert result is FavoriteAddResult.ADDED
        assert [str(pair) for pair in favorites] == ["USD → EUR"]

    def test_add_duplicate(self, favorites):
        """Test adding the same pair twice keeps one entry."""
        favorites.add("USD", "EUR")
        result = favorites.add("USD", "EUR")

        assert result is FavoriteAddResult.DUPLICATE
        assert len(favorites) == 1

    def test_reverse_pair_is_distinct(self, favorites):
        """Test EUR->USD is not a duplicate of USD->EUR."""
        favorites.add("USD", "EUR")

        assert favorites.add("EUR", "USD") is FavoriteAddResult.ADDED
        assert len(favorites) == 2

    def test_add_unknown_currency(self, favorites):
        """Test unknown codes are refused without raising."""
        assert favorites.add("USD", "XXX") is FavoriteAddResult.UNKNOWN_CURRENCY
        assert favorites.add("XXX", "USD") is FavoriteAddResult.UNKNOWN_CURRENCY
        assert len(favorites) == 0

    def test_contains_accepts_strings(self, favorites):
        """Test membership works with pairs and canonical strings."""
        favorites.add("USD", "VND")

        assert FavoritePair("USD", "VND") in favorites
        assert "USD → VND" in favorites
        assert "not a pair" not in favorites

    def test_get_is_one_based(self, favorites):
        """Test get uses 1-based indexes."""
        favorites.add("USD", "EUR")
        favorites.add("GBP", "JPY")

        assert favorites.get(1) == FavoritePair("USD", "EUR")
        assert favorites.get(2) == FavoritePair("GBP", "JPY")

    def test_remove(self, favorites):
        """Test remove returns the removed pair and keeps order."""
        favorites.add("USD", "EUR")
        favorites.add("GBP", "JPY")
        favorites.add("EUR", "VND")

        removed = favorites.remove(2)

        assert removed == FavoritePair("GBP", "JPY")
        assert favorites.pairs == [FavoritePair("USD", "EUR"), FavoritePair("EUR", "VND")]

    @pytest.mark.parametrize("index", [0, -1, 3, 100])
    def test_remove_out_of_range(self, favorites, index):
        """Test invalid indexes raise OutOfRangeError without mutating the list."""
        favorites.add("USD", "EUR")
        favorites.add("GBP", "JPY")

        with pytest.raises(OutOfRangeError):
            favorites.remove(index)

        assert len(favorites) == 2

    def test_remove_from_empty_list(self, favorites):
        """Test remove on an empty list raises OutOfRangeError."""
        with pytest.raises(OutOfRangeError):
            favorites.remove(1)

    def test_use_converts_selected_pair(self, favorites, registry, static_provider):
        """Test use converts with the selected pair."""
        favorites.add("USD", "CAD")
        converter = CurrencyConverterService(registry, static_provider)

        record = favorites.use(1, Decimal("300"), converter)

        assert record.from_code == "USD"
        assert record.to_code == "CAD"
        assert record.display_result == Decimal("375.00")

    def test_use_out_of_range(self, favorites):
        """Test use with an invalid index never calls the converter."""
        converter = MagicMock()

        with pytest.raises(OutOfRangeError):
            favorites.use(1, Decimal("10"), converter)

        converter.convert.assert_not_called()
