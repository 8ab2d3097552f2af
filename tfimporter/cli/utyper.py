import asyncio
import inspect
from functools import wraps

import typer


class UTyper(typer.Typer):
    """Typer app that also accepts `async def` commands."""

    def __init__(self, *args, **kwargs):
        kwargs.setdefault("pretty_exceptions_enable", False)
        super().__init__(*args, **kwargs)

    def command(self, *args, **kwargs):
        decorator = super().command(*args, **kwargs)

        def add_runner(f):
            @wraps(f)
            def runner(*args, **kwargs):
                if inspect.iscoroutinefunction(f):
                    return asyncio.run(f(*args, **kwargs))
                return f(*args, **kwargs)

            return decorator(runner)

        return add_runner
