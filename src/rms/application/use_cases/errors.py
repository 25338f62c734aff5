from __future__ import annotations


class MenuItemValidationError(Exception):
    pass


class InvalidMenuItemIdError(Exception):
    pass


class MenuItemNotFoundError(Exception):
    pass


class InvalidMenuQueryError(Exception):
    pass


class OrderValidationError(Exception):
    pass


class InvalidOrderIdError(Exception):
    pass


class OrderNotFoundError(Exception):
    pass


class InvalidOrderStatusError(Exception):
    pass


class InvalidOrderTransitionError(Exception):
    pass


class OrderConflictError(Exception):
    pass


class InvalidReportParameterError(Exception):
    pass
