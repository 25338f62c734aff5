from __future__ import annotations

import argparse
import cmd
import os
import shlex
import sys
from typing import Sequence

from rms.client.api_client import RestaurantApiClient
from rms.client.controller import MenuItemForm, UIController
from rms.client.rendering import ORDER_STATUS_CHOICES, render_cart
from rms.infrastructure.observability.logging_config import configure_logging


class RestaurantConsole(cmd.Cmd):
    intro = "Restaurant console. Type help or ? to list commands."
    prompt = "(restaurant) "

    def __init__(self, controller: UIController, stdout=None) -> None:
        super().__init__(stdout=stdout)
        self.controller = controller

    def _print(self, text: str) -> None:
        self.stdout.write(f"{text}\n")

    def _args(self, arg: str) -> list[str] | None:
        try:
            return shlex.split(arg)
        except ValueError as exc:
            self._print(f"*** {exc}")
            return None

    def emptyline(self) -> bool:
        return False

    def do_menu(self, arg: str) -> None:
        """menu [manage]: show the menu for ordering, or with full details."""
        if arg.strip() == "manage":
            self.controller.fetch_menu_items()
        else:
            self.controller.fetch_menu_items_for_ordering()

    def do_add(self, arg: str) -> None:
        """add ITEM_ID: add one unit of a menu item to the cart."""
        args = self._args(arg)
        if not args:
            self._print("usage: add ITEM_ID")
            return
        self.controller.add_menu_item_to_cart(args[0])

    def do_remove(self, arg: str) -> None:
        """remove ITEM_ID: remove one unit of an item from the cart."""
        args = self._args(arg)
        if not args:
            self._print("usage: remove ITEM_ID")
            return
        self.controller.remove_from_cart(args[0])

    def do_cart(self, arg: str) -> None:
        """cart: show the cart."""
        self._print(render_cart(self.controller.cart))

    def do_notes(self, arg: str) -> None:
        """notes TEXT: set the notes sent with the next order."""
        self.controller.notes = arg.strip()

    def do_checkout(self, arg: str) -> None:
        """checkout: place an order with the cart contents."""
        self.controller.checkout()

    def do_orders(self, arg: str) -> None:
        """orders: list placed orders."""
        self.controller.fetch_orders()

    def do_status(self, arg: str) -> None:
        """status ORDER_ID "STATUS": change an order's status."""
        args = self._args(arg)
        if not args or len(args) != 2:
            choices = ", ".join(ORDER_STATUS_CHOICES)
            self._print(f'usage: status ORDER_ID "STATUS"  (one of: {choices}, Cancelled)')
            return
        self.controller.change_order_status(args[0], args[1])

    def do_newitem(self, arg: str) -> None:
        """newitem NAME CATEGORY PRICE [INGREDIENTS] [TAGS] [unavailable]: add a menu item."""
        args = self._args(arg)
        if not args or len(args) < 3:
            self._print("usage: newitem NAME CATEGORY PRICE [INGREDIENTS] [TAGS] [unavailable]")
            return
        self.controller.cancel_editing()
        self.controller.submit_menu_item(_form_from_args(args))

    def do_edit(self, arg: str) -> None:
        """edit ITEM_ID NAME CATEGORY PRICE [INGREDIENTS] [TAGS] [unavailable]: replace an item."""
        args = self._args(arg)
        if not args or len(args) < 4:
            self._print("usage: edit ITEM_ID NAME CATEGORY PRICE [INGREDIENTS] [TAGS] [unavailable]")
            return
        if self.controller.start_editing(args[0]) is None:
            return
        self.controller.submit_menu_item(_form_from_args(args[1:]))

    def do_delete(self, arg: str) -> None:
        """delete ITEM_ID: delete a menu item after confirmation."""
        args = self._args(arg)
        if not args:
            self._print("usage: delete ITEM_ID")
            return
        self.controller.delete_menu_item(args[0], confirm=self._confirm)

    def do_sales(self, arg: str) -> None:
        """sales [DAYS]: daily totals of delivered orders."""
        args = self._args(arg)
        if args is None:
            return
        days = int(args[0]) if args and args[0].isdigit() else 7
        self.controller.show_sales_report(days=days)

    def do_top(self, arg: str) -> None:
        """top [LIMIT]: most ordered dishes."""
        args = self._args(arg)
        if args is None:
            return
        limit = int(args[0]) if args and args[0].isdigit() else 10
        self.controller.show_top_dishes(limit=limit)

    def do_quit(self, arg: str) -> bool:
        """quit: leave the console (the cart is discarded)."""
        return True

    do_EOF = do_quit

    def _confirm(self, question: str) -> bool:
        answer = input(f"{question} [y/N] ")
        return answer.strip().lower() in {"y", "yes"}


def _form_from_args(args: list[str]) -> MenuItemForm:
    padded = args + [""] * (5 - len(args))
    return MenuItemForm(
        name=padded[0],
        category=padded[1],
        price=padded[2],
        ingredients=padded[3],
        tags=padded[4],
        availability="unavailable" not in args[5:],
    )


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Interactive restaurant management console.")
    parser.add_argument(
        "--base-url",
        default=os.getenv("RMS_API_URL", "http://localhost:9193"),
        help="API root URL. Defaults to $RMS_API_URL or http://localhost:9193.",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    configure_logging(level=os.getenv("LOG_LEVEL", "WARNING"), stream=sys.stderr, log_format="text")
    with RestaurantApiClient(args.base_url) as api:
        console = RestaurantConsole(
            UIController(api, display=print, alert=lambda message: print(f"! {message}")),
        )
        console.cmdloop()
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
