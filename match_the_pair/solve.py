#!/usr/bin/env python3
# -*- coding: utf-8 -*-
## Solver for the Match the Pair challenge of the ASIS CTF 2014 finals
##
## Each level shows 16 squares, each with a colored circle hidden in noise.
## We download all 16 pictures in parallel, find the color of every circle and
## submit the pairs of matching colors as soon as both halves are known.

import argparse
import sys
import time
from concurrent.futures import FIRST_COMPLETED, Executor, ThreadPoolExecutor, wait
from typing import Callable, Optional

from pwn import context, log

from match_the_pair.circles import find_circle_color
from match_the_pair.client import BASE_URL, COOKIE, USER_AGENT, ChallengeClient
from match_the_pair.errors import CircleNotFoundError, MatchThePairError, UnmatchedColorsError
from match_the_pair.pairing import find_pairs, unmatched

NUM_LEVELS = 40
NUM_IMAGES = 16
NUM_WORKERS = 16


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Play all levels of the Match the Pair challenge.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--url", type=str, default=BASE_URL, help="Challenge URL")
    parser.add_argument("--cookie", type=str, default=COOKIE, help="Session cookie")
    parser.add_argument("--user-agent", type=str, default=USER_AGENT)
    parser.add_argument("--levels", type=int, default=NUM_LEVELS, help="Number of levels")
    parser.add_argument("--workers", type=int, default=NUM_WORKERS, help="Size of the thread pool")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug output")
    return parser.parse_args(argv)


def make_logger(start: float) -> Callable[[str], None]:
    # timestamps are seconds since the level started
    def debug(message: str):
        log.info(f"[{time.time() - start:6.3f}] {message}")

    return debug


def detect_color(client: ChallengeClient, image_id: int) -> int:
    color = find_circle_color(client.download_image(image_id))
    if color is None:
        raise CircleNotFoundError(image_id)
    return color


def submit_pair(
    client: ChallengeClient, first: int, second: int, debug: Callable[[str], None]
) -> tuple[int, int]:
    result = client.submit(first, second)
    debug(f"Result for {first} and {second}: {result}")
    return first, second


def play_level(
    client: ChallengeClient,
    executor: Executor,
    level: int,
    num_images: int = NUM_IMAGES,
) -> list[tuple[int, int]]:
    client.visit_index()

    debug = make_logger(time.time())
    debug(f"Playing level #{level}")

    detections = {
        executor.submit(detect_color, client, image_id): image_id
        for image_id in range(num_images)
    }

    # only touched from this thread, workers just hand back their color
    colors: list[Optional[int]] = [None] * num_images
    pairs = []
    pending = set(detections)
    detecting = num_images
    while pending:
        done, pending = wait(pending, return_when=FIRST_COMPLETED)
        for future in done:
            # a rejected submission or a failed detection ends the run here,
            # before anything else is sent to the server
            if future not in detections:
                pairs.append(future.result())
                continue

            image_id = detections[future]
            colors[image_id] = future.result()
            detecting -= 1
            log.debug(f"Image #{image_id + 1} color: {colors[image_id]:06x}")

            for first, second in find_pairs(colors):
                debug(f"Matched {first + 1} and {second + 1}")
                pending.add(executor.submit(submit_pair, client, first, second, debug))

        if detecting == 0:
            remaining = unmatched(colors)
            if remaining:
                raise UnmatchedColorsError(remaining)

    return pairs


def solve(
    client: ChallengeClient, levels: int = NUM_LEVELS, workers: int = NUM_WORKERS
) -> list[list[tuple[int, int]]]:
    results = []
    executor = ThreadPoolExecutor(max_workers=workers)
    try:
        for level in range(1, levels + 1):
            results.append(play_level(client, executor, level))
    except BaseException:
        # queued downloads and submissions must not reach the server anymore
        executor.shutdown(wait=False, cancel_futures=True)
        raise
    executor.shutdown()
    return results


def main(argv=None) -> int:
    args = parse_args(argv)
    if args.verbose:
        context.log_level = "debug"

    client = ChallengeClient(args.url, args.cookie, args.user_agent)
    try:
        results = solve(client, args.levels, args.workers)
    except (MatchThePairError, OSError) as e:
        # requests and Pillow errors are both OSErrors
        log.failure(f"ERROR: {e}")
        return 1

    log.success(f"Cleared {len(results)} levels")
    return 0


if __name__ == "__main__":
    sys.exit(main())

# vim: set tabstop=4 expandtab shiftwidth=4 softtabstop=4 number cindent fileencoding=utf-8 :
