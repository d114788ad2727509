"""
Click parameter types for the TopShot transaction CLI
"""

import click

from cadence.exceptions import InvalidAddressError
from cadence.values import Address


class AddressParamType(click.ParamType):
    """Flow address given as hex, with or without 0x prefix."""
    name = "address"

    def convert(self, value, param, ctx):
        if isinstance(value, Address):
            return value
        try:
            return Address.from_hex(value)
        except InvalidAddressError as e:
            self.fail(str(e), param, ctx)


ADDRESS = AddressParamType()
