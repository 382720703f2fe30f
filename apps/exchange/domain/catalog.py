"""
Built-in currency list and forward exchange rates.
Reverse rates are derived by RateTable.build.
"""

from decimal import Decimal

from apps.exchange.domain.models import Currency


DEFAULT_CURRENCIES = (
    Currency("USD", "US Dollar", "$"),
    Currency("EUR", "Euro", "€"),
    Currency("GBP", "British Pound", "£"),
    Currency("JPY", "Japanese Yen", "¥"),
    Currency("CAD", "Canadian Dollar", "C$"),
    Currency("AUD", "Australian Dollar", "A$"),
    Currency("CHF", "Swiss Franc", "CHF"),
    Currency("CNY", "Chinese Yuan", "¥"),
    Currency("INR", "Indian Rupee", "₹"),
    Currency("KRW", "South Korean Won", "₩"),
    Currency("VND", "Vietnamese Dong", "₫"),
    Currency("SGD", "Singapore Dollar", "S$"),
    Currency("THB", "Thai Baht", "฿"),
    Currency("MYR", "Malaysian Ringgit", "RM"),
)

# 1 base = rate target
DEFAULT_FORWARD_RATES: dict[str, dict[str, Decimal]] = {
    "USD": {
        "EUR": Decimal("0.85"),
        "GBP": Decimal("0.73"),
        "JPY": Decimal("110"),
        "CAD": Decimal("1.25"),
        "AUD": Decimal("1.35"),
        "CHF": Decimal("0.92"),
        "CNY": Decimal("6.45"),
        "INR": Decimal("74.5"),
        "KRW": Decimal("1180"),
        "VND": Decimal("23500"),
        "SGD": Decimal("1.35"),
        "THB": Decimal("33.5"),
        "MYR": Decimal("4.2"),
    },
    "EUR": {
        "USD": Decimal("1.18"),
        "GBP": Decimal("0.86"),
        "JPY": Decimal("129.5"),
        "CAD": Decimal("1.47"),
        "AUD": Decimal("1.59"),
        "CHF": Decimal("1.08"),
        "CNY": Decimal("7.6"),
        "INR": Decimal("87.8"),
        "KRW": Decimal("1391"),
        "VND": Decimal("27650"),
        "SGD": Decimal("1.59"),
        "THB": Decimal("39.4"),
        "MYR": Decimal("4.95"),
    },
    "GBP": {
        "USD": Decimal("1.37"),
        "EUR": Decimal("1.16"),
        "JPY": Decimal("150.7"),
        "CAD": Decimal("1.71"),
        "AUD": Decimal("1.85"),
        "CHF": Decimal("1.26"),
        "CNY": Decimal("8.84"),
        "INR": Decimal("102.1"),
        "KRW": Decimal("1616"),
        "VND": Decimal("32150"),
        "SGD": Decimal("1.85"),
        "THB": Decimal("45.8"),
        "MYR": Decimal("5.75"),
    },
    "VND": {
        "USD": Decimal("0.0000426"),
        "EUR": Decimal("0.0000362"),
        "GBP": Decimal("0.0000311"),
        "JPY": Decimal("0.0047"),
        "CAD": Decimal("0.0000532"),
        "AUD": Decimal("0.0000575"),
        "CHF": Decimal("0.0000390"),
        "CNY": Decimal("0.000275"),
        "INR": Decimal("0.00317"),
        "KRW": Decimal("0.050"),
        "SGD": Decimal("0.0000575"),
        "THB": Decimal("0.00143"),
        "MYR": Decimal("0.00018"),
    },
}
