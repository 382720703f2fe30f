"""
Interactive console menu.
Every action runs to completion before the next choice is read.
"""

import asyncio
import logging
from typing import Optional, TextIO

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, Prompt
from rich.table import Table

from apps.exchange.application.calculator import calculate, parse_number
from apps.exchange.application.session import ExchangeSession
from apps.exchange.domain.errors import (
    ExchangeError,
    InvalidAmountError,
    OutOfRangeError,
    RateServiceError,
    UnknownCurrencyError,
    UnknownPairError,
)
from apps.exchange.domain.favorites import FavoriteAddResult
from apps.exchange.domain.models import ConversionRecord, FavoritePair
from apps.exchange.domain.rates import normalize_code
from apps.exchange.domain.services import to_amount


logger = logging.getLogger(__name__)

MENU = (
    ("1", "💰 Convert Currency"),
    ("2", "📋 View Currency List"),
    ("3", "📊 Conversion History"),
    ("4", "⭐ Manage Favorites"),
    ("5", "🧮 Quick Calculator"),
    ("6", "📈 Exchange Rates Table"),
    ("7", "🗑️ Clear History"),
    ("0", "🚪 Exit"),
)


def error_message(error: ExchangeError) -> str:
    if isinstance(error, InvalidAmountError):
        return "Invalid amount!"
    if isinstance(error, UnknownCurrencyError):
        return "Invalid currency code!"
    if isinstance(error, UnknownPairError):
        return "No exchange rate for this currency pair!"
    if isinstance(error, OutOfRangeError):
        return "Invalid choice!"
    if isinstance(error, RateServiceError):
        return f"Rate service error: {error}"
    return str(error)


class XChangeConsole:
    """Numbered menu over an ExchangeSession, rendered with rich."""

    def __init__(
        self,
        session: ExchangeSession,
        console: Optional[Console] = None,
        stream: Optional[TextIO] = None
    ):
        self.session = session
        self.console = console or Console()
        self.stream = stream
        self.actions = {
            "1": self.convert_currency,
            "2": self.show_currencies,
            "3": self.show_history,
            "4": self.manage_favorites,
            "5": self.quick_calculator,
            "6": self.show_exchange_rates,
            "7": self.clear_history,
        }

    # Input / output helpers

    def ask(self, prompt: str) -> str:
        return Prompt.ask(prompt, console=self.console, stream=self.stream).strip()

    def ask_code(self, prompt: str) -> str:
        return normalize_code(self.ask(prompt))

    def confirm(self, prompt: str) -> bool:
        return Confirm.ask(prompt, console=self.console, stream=self.stream, default=False)

    def title(self, text: str) -> None:
        self.console.print()
        self.console.print(f"[bold]{text}[/]")
        self.console.print("=" * max(len(text), 20))

    def success(self, text: str) -> None:
        self.console.print(f"[green]✅ {escape(text)}[/]")

    def warning(self, text: str) -> None:
        self.console.print(f"[yellow]⚠️ {escape(text)}[/]")

    def error(self, text: str) -> None:
        self.console.print(f"[red]❌ {escape(text)}[/]")

    # Main loop

    def run(self) -> None:
        self.show_welcome()

        while True:
            self.show_menu()
            try:
                choice = self.ask("Select function (0-7)")
            except (EOFError, KeyboardInterrupt):
                choice = "0"

            if choice == "0":
                self.console.print("\n👋 Thank you for using Currency Converter!")
                return

            action = self.actions.get(choice)
            if action is None:
                self.error("Invalid choice!")
                continue

            try:
                action()
            except ExchangeError as e:
                logger.debug("Action %s failed: %s", choice, e)
                self.error(error_message(e))

    def show_welcome(self) -> None:
        self.title("💱 CURRENCY CONVERTER")
        self.console.print("Welcome to the Currency Converter application!")

        history = self.session.history
        if not history.is_persistent:
            self.console.print("📁 Offline mode: history is kept in memory only")
        elif history.file_exists():
            self.console.print(f"📁 History file: {escape(str(history.path))} (Found {len(history)} records)")
        else:
            self.console.print(f"📁 History file: {escape(str(history.path))} (Will be created)")

    def show_menu(self) -> None:
        self.title("💱 CURRENCY CONVERTER - MAIN MENU")
        for key, label in MENU:
            self.console.print(f"{key}. {label}")

    # Actions

    def _convert(self, amount, source_currency: str, exchanged_currency: str) -> ConversionRecord:
        converter = self.session.converter
        return asyncio.run(converter.convert_async(amount, source_currency, exchanged_currency))

    def _print_favorites(self) -> None:
        for index, pair in enumerate(self.session.favorites, start=1):
            self.console.print(f"   {index}. {pair}")

    def convert_currency(self) -> None:
        self.title("💰 CONVERT CURRENCY")

        if len(self.session.favorites):
            self.console.print("⭐ Favorite Currency Pairs:")
            self._print_favorites()
            self.console.print()

        registry = self.session.config.registry

        amount = to_amount(self.ask("Enter amount"))
        source_code = registry.require(self.ask_code("From currency (e.g., USD)")).code
        exchanged_code = registry.require(self.ask_code("To currency (e.g., VND)")).code

        record = self._convert(amount, source_code, exchanged_code)

        if source_code == exchanged_code:
            self.success(f"Result: {record.display_result} {source_code}")
            return

        self.print_conversion(record)

        pair = FavoritePair(source_code, exchanged_code)
        if pair not in self.session.favorites and self.confirm("\n⭐ Add this currency pair to favorites?"):
            self.session.favorites.add(source_code, exchanged_code)
            self.success("Added to favorites list!")

    def print_conversion(self, record: ConversionRecord) -> None:
        registry = self.session.config.registry
        source = registry.require(record.from_code)
        target = registry.require(record.to_code)

        self.title("✅ CONVERSION RESULT")
        self.console.print(f"Original amount: {record.amount:.2f} {source.code} ({escape(source.name)})")
        self.console.print(f"Exchange rate: 1 {source.code} = {record.display_rate} {target.code}")
        self.console.print(f"Result: {record.display_result} {target.code} ({escape(target.name)})")
        self.console.print(f"Symbol: {escape(target.symbol)}{record.display_result}")

    def show_currencies(self) -> None:
        self.title("📋 CURRENCY LIST")

        currencies = self.session.list_currencies()
        table = Table(box=box.SIMPLE)
        table.add_column("#", justify="right")
        table.add_column("Code")
        table.add_column("Name")
        table.add_column("Symbol")

        for index, currency in enumerate(currencies, start=1):
            table.add_row(str(index), currency.code, escape(currency.name), escape(currency.symbol))

        self.console.print(table)
        self.console.print(f"Total: {len(currencies)} currencies")

    def show_history(self) -> None:
        self.title("📊 CONVERSION HISTORY")

        view = self.session.history_view()
        if not view.lines:
            self.console.print("📝 No conversion history yet.")
            return

        self.console.print(f"Displaying {len(view.lines)} most recent conversions:")
        if view.source:
            self.console.print(f"💾 Data source: {escape(view.source)}")
        self.console.print()

        for index, line in enumerate(view.lines, start=1):
            self.console.print(f"{index:2}. {escape(line)}")

        stats = view.statistics
        if stats.total_conversions:
            self.console.print("\n📈 STATISTICS:")
            self.console.print(f"- Total conversions: {stats.total_conversions}")
            self.console.print(f"- Total amount converted: {stats.total_amount:.2f}")
            self.console.print(f"- Most used source currency: {stats.most_used_source}")
            self.console.print(f"- Most used target currency: {stats.most_used_target}")

    def manage_favorites(self) -> None:
        self.title("⭐ MANAGE FAVORITES")

        if not len(self.session.favorites):
            self.console.print("📝 No favorite currency pairs yet.")
            self.console.print("\n1. Add favorite currency pair")
            self.console.print("0. Back")
            if self.ask("Choose") == "1":
                self.add_favorite()
            return

        self.console.print("List of favorite currency pairs:\n")
        self._print_favorites()

        self.console.print("\n1. Use favorite currency pair")
        self.console.print("2. Add new currency pair")
        self.console.print("3. Remove favorite currency pair")
        self.console.print("0. Back")

        option = self.ask("Choose")
        if option == "1":
            self.use_favorite()
        elif option == "2":
            self.add_favorite()
        elif option == "3":
            self.remove_favorite()

    def _ask_index(self, prompt: str) -> int:
        answer = self.ask(prompt)
        try:
            return int(answer)
        except ValueError:
            raise OutOfRangeError(answer, len(self.session.favorites)) from None

    def add_favorite(self) -> None:
        source_code = self.ask_code("Enter source currency (e.g., USD)")
        exchanged_code = self.ask_code("Enter target currency (e.g., VND)")

        result = self.session.favorites.add(source_code, exchanged_code)
        pair = FavoritePair(source_code, exchanged_code)

        if result is FavoriteAddResult.ADDED:
            self.success(f"Added '{pair}' to favorites!")
        elif result is FavoriteAddResult.DUPLICATE:
            self.warning("This currency pair is already in the favorites list!")
        else:
            self.error("Invalid currency code!")

    def use_favorite(self) -> None:
        favorites = self.session.favorites
        pair = favorites.get(self._ask_index("Select the number of the currency pair"))
        amount = to_amount(self.ask("Enter amount"))

        record = self._convert(amount, pair.from_code, pair.to_code)
        self.success(f"{record.amount:.2f} {record.from_code} = {record.display_result} {record.to_code}")
        self.console.print(f"Exchange rate: {record.display_rate}")

    def remove_favorite(self) -> None:
        removed = self.session.favorites.remove(self._ask_index("Select the number of the currency pair to remove"))
        self.success(f"Removed '{removed}' from favorites list!")

    def quick_calculator(self) -> None:
        self.title("🧮 QUICK CALCULATOR")

        left = parse_number(self.ask("Enter first number"))
        operator = self.ask("Enter operation (+, -, *, /)")
        right = parse_number(self.ask("Enter second number"))

        result = calculate(left, operator, right)
        self.success(f"Result of {result.operation_name} operation:")
        self.console.print(f"{result.left} {escape(result.operator)} {result.right} = {result.value:.2f}")

    def show_exchange_rates(self) -> None:
        self.title("📈 EXCHANGE RATES TABLE")

        base_code = self.ask_code("Enter base currency code (e.g., USD)")
        rows = self.session.rate_rows(base_code)
        if not rows:
            self.error("No exchange rates for this currency!")
            return

        base = self.session.config.registry.require(base_code)
        table = Table(title=f"Exchange rates from {base.code} ({escape(base.name)})", box=box.SIMPLE)
        table.add_column("Rate", justify="right")
        table.add_column("Currency")

        for row in rows:
            table.add_row(
                f"1 {row.base_currency} = {row.rate:.4f} {row.target_currency}",
                escape(row.target_name),
            )

        self.console.print(table)

    def clear_history(self) -> None:
        self.title("🗑️ CLEAR HISTORY")

        history = self.session.history
        if not len(history) and not history.file_exists():
            self.console.print("📝 No history to clear.")
            return

        if not self.confirm(f"Are you sure you want to delete {len(history)} history records?"):
            self.error("Operation canceled.")
            return

        if history.clear():
            self.success("All history cleared!")
        else:
            self.warning("History cleared from memory, but the history file could not be emptied.")
