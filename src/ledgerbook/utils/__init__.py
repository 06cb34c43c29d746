"""Utility functions for ledgerbook."""

from ledgerbook.utils.date_parser import parse_date
from ledgerbook.utils.amount_parser import parse_amount
from ledgerbook.utils.product_parser import parse_products, parse_name_list

__all__ = ["parse_date", "parse_amount", "parse_products", "parse_name_list"]
