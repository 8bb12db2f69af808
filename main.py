import asyncio
import logging
import platform
import signal
import sys

from site_monitor.config import load_settings
from site_monitor.errors import ConfigurationError, StorePersistenceError
from site_monitor.monitor import SiteMonitor
from site_monitor.store import ResultStore

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S",
    handlers=[logging.StreamHandler(sys.stdout)],
)
log = logging.getLogger("main")


async def main() -> int:
    try:
        settings = load_settings()
        store = ResultStore.from_connection_string(
            settings.store_connection_string.get_secret_value(),
            table_name=settings.table_name,
        )
    except ConfigurationError as exc:
        log.critical("%s", exc)
        return 1

    logging.getLogger().setLevel(settings.log_level)

    async with store:
        monitor = SiteMonitor.from_settings(settings, store)
        loop = asyncio.get_running_loop()
        signals = (signal.SIGINT, signal.SIGTERM) if platform.system() != "Windows" else ()

        def _shutdown(sig: signal.Signals) -> None:
            log.info("Received %s, stopping after the current host...", sig.name)
            monitor.stop()

        for sig in signals:
            loop.add_signal_handler(sig, _shutdown, sig)

        try:
            await monitor.run()
        except StorePersistenceError:
            log.exception("Result store failure, monitor halted.")
            return 1
        except asyncio.CancelledError:
            log.info("Monitor cancelled.")
        finally:
            for sig in signals:
                loop.remove_signal_handler(sig)
    return 0


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        log.info("Shutting down...")
