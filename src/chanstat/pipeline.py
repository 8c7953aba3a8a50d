"""Run a configured log analysis end to end.

Collectors and the channel model both see every line: collectors through the
parser's callbacks, the channel through the events the parser returns. Files
are processed oldest first, since actor and mode history depends on order.
"""

import logging
from dataclasses import dataclass

from .channel import Channel
from .collectors import Collector
from .collectors.eventcount import EventCountCollector
from .collectors.sentiments import SentimentCollector
from .config import CollectorsConfig, Config
from .modes import parse_isupport
from .parsers import get_parser
from .parsers.znc import LogStats
from .progress import NullProgress
from .writers import WRITERS

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    channel: Channel
    files: int
    stats: LogStats


def build_collectors(config: CollectorsConfig) -> list[Collector]:
    collectors: list[Collector] = []
    if config.eventcount:
        collectors.append(EventCountCollector())
    if config.sentiments is not None:
        collectors.append(SentimentCollector(lexicon=config.sentiments.lexicon))
    return collectors


def build_channel(config: Config) -> Channel:
    """A fresh channel with the configured modes already known."""
    channel = Channel(config.parser.channel)
    channel.set_available_modes(*parse_isupport(config.modes.chanmodes, config.modes.prefix))
    return channel


def run(config: Config, progress=None) -> RunResult:
    """Parse every log file, replay it into a channel, and save statistics.

    Args:
        config: Validated configuration
        progress: Object with start/tick/end (see chanstat.progress);
            nothing is shown if omitted

    Raises:
        ChanstatError: Invalid configuration or mode setup
        OSError: A log, lexicon or output file could not be read or written
    """
    if progress is None:
        progress = NullProgress()

    collector = Collector.combine(build_collectors(config.collectors))
    writer = WRITERS[config.writer.name](config.writer.target, spacing=config.writer.spacing)
    channel = build_channel(config)
    parser = get_parser(config.parser.name)(collector)

    files = parser.find_log_files(config.parser.path)
    if not files:
        logger.warning(f"No log files found in {config.parser.path}")
    else:
        logger.info(f"Processing {len(files)} log files from {files[0][0]} to {files[-1][0]}")

    totals = LogStats()
    progress.start("Parsing logs", len(files))
    try:
        for day, path in files:
            totals += parser.read_log(day, path, channel)
            progress.tick()
    finally:
        progress.end()

    collector.save(writer.write)
    logger.info(
        f"Processed {totals.lines} lines ({totals.events} events, {totals.skipped} skipped); "
        f"results written to {config.writer.target}"
    )
    return RunResult(channel=channel, files=len(files), stats=totals)
