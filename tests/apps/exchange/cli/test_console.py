import io
import pytest
from decimal import Decimal

from rich.console import Console

from apps.exchange.application.config import ExchangeConfig
from apps.exchange.application.session import create_session
from apps.exchange.cli.console import error_message, XChangeConsole
from apps.exchange.domain.errors import (
    InvalidAmountError,
    OutOfRangeError,
    RateServiceError,
    UnknownCurrencyError,
    UnknownPairError,
)
from apps.exchange.domain.models import FavoritePair


@pytest.fixture
def session(registry, rate_table, history_file):
    config = ExchangeConfig(registry=registry, rate_table=rate_table, history_path=history_file)
    return create_session(config)


@pytest.fixture
def run_console(session):
    """Run the menu with the given input lines and return what was printed."""
    def _run(*lines):
        console = Console(file=io.StringIO(), width=200, color_system=None)
        stream = io.StringIO("\n".join(lines) + "\n")
        XChangeConsole(session, console=console, stream=stream).run()
        return console.file.getvalue()
    return _run


class TestErrorMessage:
    """Tests for user facing error messages."""

    @pytest.mark.parametrize("error, message", [
        (InvalidAmountError("bad"), "Invalid amount!"),
        (UnknownCurrencyError("XXX"), "Invalid currency code!"),
        (UnknownPairError("EUR", "CAD"), "No exchange rate for this currency pair!"),
        (OutOfRangeError(5, 1), "Invalid choice!"),
    ])
    def test_error_message(self, error, message):
        assert error_message(error) == message

    def test_rate_service_error_message(self):
        assert error_message(RateServiceError("down")) == "Rate service error: down"


class TestXChangeConsole:
    """Tests for the interactive menu."""

    def test_exit(self, run_console):
        """Test choice 0 leaves the menu."""
        output = run_console("0")

        assert "MAIN MENU" in output
        assert "Thank you for using Currency Converter!" in output

    def test_end_of_input_exits(self, session, mocker):
        """Test the menu ends when standard input is exhausted."""
        mocker.patch("sys.stdin", io.StringIO(""))
        console = Console(file=io.StringIO(), width=200, color_system=None)

        XChangeConsole(session, console=console).run()

        assert "Thank you" in console.file.getvalue()

    def test_invalid_menu_choice(self, run_console):
        output = run_console("9", "0")

        assert "Invalid choice!" in output

    def test_convert_currency(self, run_console, session):
        """Test a conversion is printed and recorded."""
        output = run_console("1", "100", "usd", "EUR", "n", "0")

        assert "Exchange rate: 1 USD = 0.8500 EUR" in output
        assert "Result: 85.00 EUR (Euro)" in output
        assert len(session.history) == 1
        assert len(session.favorites) == 0

    def test_convert_and_add_favorite(self, run_console, session):
        """Test the pair can be added to favorites after converting."""
        output = run_console("1", "100", "USD", "EUR", "y", "0")

        assert "Added to favorites list!" in output
        assert FavoritePair("USD", "EUR") in session.favorites

    def test_convert_invalid_amount(self, run_console, session):
        """Test an invalid amount is reported and nothing is recorded."""
        output = run_console("1", "-5", "0")

        assert "Invalid amount!" in output
        assert len(session.history) == 0

    def test_convert_unknown_currency(self, run_console):
        output = run_console("1", "100", "XXX", "0")

        assert "Invalid currency code!" in output

    def test_convert_unknown_pair(self, run_console, session):
        output = run_console("1", "100", "JPY", "CAD", "0")

        assert "No exchange rate for this currency pair!" in output
        assert len(session.history) == 0

    def test_convert_same_currency(self, run_console, session):
        """Test converting to the same currency returns the amount."""
        output = run_console("1", "42", "USD", "USD", "0")

        assert "Result: 42.00 USD" in output
        assert len(session.history) == 0

    def test_show_currencies(self, run_console):
        output = run_console("2", "0")

        assert "Vietnamese Dong" in output
        assert "Total: 14 currencies" in output

    def test_show_empty_history(self, run_console):
        output = run_console("3", "0")

        assert "No conversion history yet." in output

    def test_show_history_with_statistics(self, run_console):
        """Test history lines and statistics are displayed."""
        output = run_console("1", "300", "USD", "CAD", "n", "3", "0")

        assert "300 USD → 375.00 CAD (Rate: 1.2500)" in output
        assert "Total conversions: 1" in output
        assert "Total amount converted: 300.00" in output
        assert "Most used source currency: USD" in output
        assert "Most used target currency: CAD" in output

    def test_manage_favorites_add_and_use(self, run_console, session):
        """Test adding a favorite pair and converting with it."""
        output = run_console(
            "4", "1", "gbp", "jpy",
            "4", "1", "1", "10",
            "0",
        )

        assert "Added 'GBP → JPY' to favorites!" in output
        assert "10.00 GBP = 1507.00 JPY" in output
        assert session.history.records[0].to_code == "JPY"

    def test_manage_favorites_duplicate(self, run_console, session):
        session.favorites.add("USD", "EUR")

        output = run_console("4", "2", "USD", "EUR", "0")

        assert "already in the favorites list" in output
        assert len(session.favorites) == 1

    def test_manage_favorites_invalid_code(self, run_console, session):
        output = run_console("4", "1", "USD", "XXX", "0")

        assert "Invalid currency code!" in output
        assert len(session.favorites) == 0

    def test_remove_favorite(self, run_console, session):
        session.favorites.add("USD", "EUR")

        output = run_console("4", "3", "1", "0")

        assert "Removed 'USD → EUR' from favorites list!" in output
        assert len(session.favorites) == 0

    def test_remove_favorite_out_of_range(self, run_console, session):
        session.favorites.add("USD", "EUR")

        output = run_console("4", "3", "5", "0")

        assert "Invalid choice!" in output
        assert len(session.favorites) == 1

    def test_quick_calculator(self, run_console):
        output = run_console("5", "10", "/", "4", "0")

        assert "Result of division operation:" in output
        assert "10 / 4 = 2.50" in output

    def test_quick_calculator_divide_by_zero(self, run_console):
        output = run_console("5", "10", "/", "0", "0")

        assert "Cannot divide by zero" in output

    def test_quick_calculator_overflow(self, run_console):
        """Test an overflowing calculation is reported and the menu keeps running."""
        output = run_console("5", "9E+999999", "*", "10", "0")

        assert "Result is out of range" in output
        assert "Thank you for using Currency Converter!" in output

    def test_convert_amount_out_of_range(self, run_console, session):
        output = run_console("1", "9E+999999", "USD", "VND", "0")

        assert "Invalid amount!" in output
        assert len(session.history) == 0

    def test_exchange_rates_table(self, run_console):
        output = run_console("6", "usd", "0")

        assert "1 USD = 0.8500 EUR" in output
        assert "1 USD = 23500.0000 VND" in output

    def test_exchange_rates_unknown_currency(self, run_console):
        output = run_console("6", "XXX", "0")

        assert "Invalid currency code!" in output

    def test_clear_history(self, run_console, session, history_file):
        """Test clearing history after confirmation."""
        session.converter.convert(Decimal("100"), "USD", "EUR")

        output = run_console("7", "y", "0")

        assert "All history cleared!" in output
        assert len(session.history) == 0
        assert not history_file.exists()

    def test_clear_history_canceled(self, run_console, session, history_file):
        session.converter.convert(Decimal("100"), "USD", "EUR")

        output = run_console("7", "n", "0")

        assert "Operation canceled." in output
        assert len(session.history) == 1
        assert history_file.exists()

    def test_clear_empty_history(self, run_console):
        output = run_console("7", "0")

        assert "No history to clear." in output
