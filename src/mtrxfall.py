#!/usr/bin/env python3
"""
mtrxfall - digital rain waterfall for truecolor terminals
"""
import logging
import os
import random
import signal
import sys
import time

from ansiterm import AnsiSink, TerminalSizeError, restore, terminal_size
from waterfall import SPAWN_COLORS, Waterfall

# Debug logging
DEBUG = os.environ.get('MTRXFALL_DEBUG', '0') in ('1', 'true', 'True')
LOG_PATH = '/tmp/mtrxfall.log'

FRAME_DELAY_SEC = 0.08

logger = logging.getLogger('mtrxfall')


def configure_logging(debug: bool = DEBUG, path: str = LOG_PATH):
    # stdout belongs to the animation, so logs only ever go to a file
    if not debug:
        logger.addHandler(logging.NullHandler())
        return
    handler = logging.FileHandler(path)
    handler.setFormatter(logging.Formatter('[%(asctime)s] %(message)s', '%Y-%m-%d %H:%M:%S'))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)


def make_rng(seed=None) -> random.Random:
    if seed is None:
        seed = time.time_ns() // 1000
    logger.debug('seed=%s', seed)
    return random.Random(seed)


def build(width: int, height: int, rng: random.Random) -> Waterfall:
    base_color = rng.choice(SPAWN_COLORS)
    logger.debug('grid %dx%d, base color %s', width, height, base_color)
    return Waterfall(width, height, base_color)


def run(waterfall: Waterfall, sink, rng: random.Random, frames=None, sleep=time.sleep):
    """Render, step, sleep. Runs forever unless `frames` is given."""
    tick = 0
    while frames is None or tick < frames:
        waterfall.render(sink)
        spawned = waterfall.step(rng)
        if tick % 100 == 0:
            logger.debug('tick %d: %d/%d columns spawned', tick, spawned, waterfall.width)
        sleep(FRAME_DELAY_SEC)
        tick += 1


def _terminate(signum, frame):
    raise KeyboardInterrupt


def main():
    configure_logging()
    logger.debug('mtrxfall starting')
    logger.debug('TERM=%s, COLORTERM=%s', os.environ.get('TERM'), os.environ.get('COLORTERM'))

    try:
        width, height = terminal_size(sys.stdout)
    except TerminalSizeError as e:
        logger.debug('fatal: %s', e)
        print(f"mtrxfall: {e}", file=sys.stderr)
        sys.exit(1)

    rng = make_rng()
    waterfall = build(width, height, rng)
    sink = AnsiSink(sys.stdout)

    signal.signal(signal.SIGTERM, _terminate)
    try:
        run(waterfall, sink, rng)
    except KeyboardInterrupt:
        logger.debug('interrupted')
    finally:
        restore(sink)
    sys.exit(0)


if __name__ == '__main__':
    main()
