# -*- mode: python; encoding: utf-8 -*-
#
# Copyright 2021 the highlightd contributors
#
# Licensed under the Apache License, Version 2.0 (the "License"); you may not
# use this file except in compliance with the License.  You may obtain a copy of
# the License at
#
#   http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS, WITHOUT
# WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.  See the
# License for the specific language governing permissions and limitations under
# the License.

from __future__ import annotations

import asyncio
import logging
import logging.handlers
import os
import signal
import sys
from typing import (
    Any,
    Awaitable,
    ClassVar,
    Literal,
    Optional,
    Sequence,
    Tuple,
    Type,
    TypeVar,
)

logger = logging.getLogger(__name__)

from highlightd import base

LOG_LEVELS = ("debug", "info", "warning", "error", "critical")

LogMode = Literal["stderr", "file"]


class SetContextFilter(logging.Filter):
    def filter(self, record: Any) -> bool:
        if not hasattr(record, "context"):
            record.context = record.name
        return True


T = TypeVar("T")


class BackgroundServiceCallbacks:
    """Callbacks that BackgroundService sub-classes can override.

    The function type of overriding methods (`def` vs `async def`) must match
    the declarations in this interface.
    """

    def will_start(self) -> bool:
        """Called before the service starts.

        If a false value is returned, the service exits immediately with a
        zero exit status, meaning it will be disabled.

        Logging is set up and |self.settings| contains all settings, but
        nothing else will have been done.
        """
        return True

    async def did_start(self) -> None:
        """Called after the service is listening."""
        pass

    async def will_stop(self) -> None:
        """Called after the listening socket has been closed.

        In-flight connections are still being served at this point."""
        pass

    def did_stop(self) -> None:
        """Called when the service has stopped."""
        pass


class BackgroundService(BackgroundServiceCallbacks):
    name: ClassVar[str]

    manage_pidfile = True
    log_mode: ClassVar[Optional[LogMode]] = None
    log_level: ClassVar[Optional[str]] = None

    inet_server: Optional[asyncio.AbstractServer]

    def __init__(self, settings: Optional[base.Settings] = None) -> None:
        super().__init__()

        self.settings = settings if settings is not None else base.settings()
        self.loop = asyncio.get_running_loop()
        self.inet_server = None
        self.__stopped = asyncio.Event()

    def pidfile_path(self) -> Optional[str]:
        runtime_dir = self.settings["paths.runtime"]
        if runtime_dir is None:
            return None
        return os.path.join(runtime_dir, self.name + ".pid")

    @classmethod
    def logfile_path(cls, settings: base.Settings) -> str:
        return os.path.join(settings["paths.logs"], cls.name + ".log")

    def socket_address(self) -> Optional[Tuple[str, int]]:
        return None

    @property
    def listening_address(self) -> Optional[Tuple[str, int]]:
        if not self.inet_server or not self.inet_server.sockets:
            return None
        host, port = self.inet_server.sockets[0].getsockname()[:2]
        return host, port

    @classmethod
    def loglevel(cls, settings: base.Settings) -> int:
        loglevel_name = cls.log_level
        if loglevel_name is None:
            loglevel_name = settings["service.loglevel"]
        if loglevel_name not in LOG_LEVELS:
            raise base.InvalidConfiguration(
                f"service.loglevel: invalid log level: {loglevel_name}"
            )
        return getattr(logging, loglevel_name.upper())

    @classmethod
    def configure_logging(
        cls, settings: base.Settings, argv: Optional[Sequence[str]] = None
    ) -> None:
        if argv is None:
            argv = sys.argv[1:]

        for arg in argv:
            if arg.startswith("--log-mode="):
                log_mode_arg = arg[len("--log-mode=") :]
                assert log_mode_arg in ("stderr", "file")
                cls.log_mode = log_mode_arg  # type: ignore
            if arg.startswith("--log-level="):
                log_level_arg = arg[len("--log-level=") :]
                assert log_level_arg in LOG_LEVELS
                cls.log_level = log_level_arg

        handler: logging.Handler
        if cls.log_mode == "file":
            formatter = logging.Formatter(
                "(%(asctime)s)  %(levelname)7s  [%(context)s] %(message)s"
            )
            handler = logging.handlers.RotatingFileHandler(
                cls.logfile_path(settings), maxBytes=16 * 1024 ** 2, backupCount=5
            )
        else:
            formatter = logging.Formatter(
                f"%(levelname)7s  [{cls.name}][%(context)s] %(message)s"
            )
            handler = logging.StreamHandler()

        handler.setFormatter(formatter)
        handler.setLevel(cls.loglevel(settings))
        handler.addFilter(SetContextFilter())

        root_logger = logging.getLogger()
        root_logger.setLevel(cls.loglevel(settings))
        root_logger.addHandler(handler)

        logging.getLogger("asyncio").setLevel(logging.ERROR)

    async def start(self, *, install_signal_handlers: bool = True) -> None:
        logger.info("Starting service")

        if install_signal_handlers:
            self.loop.add_signal_handler(signal.SIGTERM, self.terminate)
            self.loop.add_signal_handler(signal.SIGINT, self.terminate)

        pidfile_path = self.pidfile_path() if self.manage_pidfile else None
        if pidfile_path:
            with open(pidfile_path, "w") as pidfile:
                print(os.getpid(), file=pidfile)

        if getattr(self, "manage_socket", False):
            socket_address = self.socket_address()
            if socket_address:
                self.inet_server = await self.loop.create_server(
                    self.handle_connection, *socket_address  # type: ignore
                )
                host, port = base.asserted(self.listening_address)
                logger.info("Listening at: %s:%d", host, port)

        await self.did_start()

    def terminate(self) -> None:
        logger.debug("terminate")
        self.check_future(self.stop())

    async def stop(self) -> None:
        self.__stopped.set()

    async def shutdown(self) -> None:
        if self.inet_server:
            self.inet_server.close()

        await self.will_stop()

        if self.inet_server:
            await self.inet_server.wait_closed()

        pidfile_path = self.pidfile_path() if self.manage_pidfile else None
        if pidfile_path:
            try:
                os.unlink(pidfile_path)
            except OSError:
                logger.warning("Failed to unlink: %s", pidfile_path)

        self.did_stop()

    async def run(self, *, install_signal_handlers: bool = True) -> None:
        if not self.will_start():
            logger.info("Service disabled")
            return

        await self.start(install_signal_handlers=install_signal_handlers)
        await self.__stopped.wait()
        await self.shutdown()

    def check_future(self, coroutine_or_future: Awaitable[T]) -> "asyncio.Future[T]":
        def check(future: "asyncio.Future[T]") -> None:
            if future.cancelled():
                return
            try:
                future.result()
            except Exception:
                logger.exception("Checked coroutine failed: %r", coroutine_or_future)

        future = asyncio.ensure_future(coroutine_or_future)
        future.add_done_callback(check)
        return future


def call(
    service_class: Type[BackgroundService],
    settings: Optional[base.Settings] = None,
    argv: Optional[Sequence[str]] = None,
) -> int:
    """Run |service_class| until it is stopped by a signal

    Returns the process exit status."""

    try:
        if settings is None:
            settings = base.settings()
        service_class.configure_logging(settings, argv)
    except base.Error as error:
        print(f"{service_class.name}: {error}", file=sys.stderr)
        return 1

    async def run() -> int:
        try:
            service = service_class(settings)
        except base.Error as error:
            logger.error("%s", error)
            return 1
        except Exception:
            logger.exception("Service factory failed")
            return 1

        logger.debug("starting service")

        try:
            await service.run()
        except Exception:
            logger.exception("Service running failed")
            return 1

        logger.debug("service stopped")
        return 0

    return asyncio.run(run())
