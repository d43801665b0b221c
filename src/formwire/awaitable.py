import inspect


async def settle(value):
    """ Return *value*, awaiting it first if it is awaitable. This lets
        caller-supplied hooks be either plain functions or coroutine
        functions.
    """

    if inspect.isawaitable(value):
        value = await value

    return value


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
