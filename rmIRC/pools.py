"""
Map pools.

A pool directory holds one text file per pool. Every non-blank, newline
terminated line of a file is a map name and the file name is the pool name.

The store keeps the loaded pools as one immutable tuple. A reload builds a new
tuple next to the old one and publishes it with a single assignment, so a
reader always sees either every old pool or every new pool.
"""
from typing import Any, List, Optional, Sequence, Tuple
from rmIRC.logger import NullLogger
from rmIRC.logMessages import *
import os
import random
import threading

MAX_RESPONSES = 20
MAX_POOLS = MAX_RESPONSES - 2
MAX_MAPS_PER_POOL = 25
MAX_MAP_LENGTH = 98


class PoolError(Exception):
    """Base class for map pool errors."""


class PoolLoadError(PoolError):
    """The pool directory could not be read."""


class EmptyPoolStoreError(PoolError):
    """A random map was requested but no pools are loaded."""


class InvalidPoolIndexError(PoolError):
    """A pool number outside 1..len(pools) was requested."""

    def __init__(self, index: Any, count: int):
        super().__init__(f"invalid pool number {index!r} (have {count} pools)")
        self.index = index
        self.count = count


class Pool:
    """
    A named, non-empty, read-only list of maps.
    """
    __slots__ = ("name", "maps")

    def __init__(self, name: str, maps: Sequence[str]):
        if not maps:
            raise ValueError(f"pool {name!r} has no maps")
        self.name = name
        self.maps: Tuple[str, ...] = tuple(maps)

    def __len__(self) -> int:
        return len(self.maps)

    def __repr__(self) -> str:
        return f"Pool({self.name!r}, {len(self.maps)} maps)"


def read_pool_file(location: str, max_maps: int = MAX_MAPS_PER_POOL, logger: Any = None) -> List[str]:
    """
    Reads the maps listed in one pool file.
    Bad lines are skipped with a warning rather than failing the file.
    @arg location: Path of the pool file.
    @kwarg max_maps: Maps past this count are dropped. (default: MAX_MAPS_PER_POOL)
    @kwarg logger: Logger for warnings. (default: None)
    @return: The map names, possibly empty.
    @raise OSError, UnicodeDecodeError: if the file cannot be read.
    """
    logger = logger if logger is not None else NullLogger()
    maps: List[str] = []

    with open(location, "r", encoding="utf-8", newline="") as fp:
        for lineno, line in enumerate(fp, start=1):
            if not line.endswith("\n"):
                logger.warning("POOL", LOG_POOL_LINE_UNTERMINATED, location=location, lineno=lineno)
                continue

            entry = line.strip()
            if len(entry) > MAX_MAP_LENGTH:
                logger.warning("POOL", LOG_POOL_LINE_TOO_LONG, location=location, lineno=lineno)
                continue
            if not entry:
                logger.warning("POOL", LOG_POOL_LINE_BLANK, location=location, lineno=lineno)
                continue

            if len(maps) >= max_maps:
                logger.warning("POOL", LOG_POOL_TOO_MANY_MAPS, location=location, limit=max_maps)
                break
            maps.append(entry)

    return maps


def load_pools(directory: str, max_pools: int = MAX_POOLS, max_maps: int = MAX_MAPS_PER_POOL,
               logger: Any = None) -> Tuple[Pool, ...]:
    """
    Builds pools from every file in a directory, in file name order.
    @arg directory: The pool directory.
    @kwarg max_pools: Pools past this count are dropped. (default: MAX_POOLS)
    @kwarg max_maps: Per-pool map limit. (default: MAX_MAPS_PER_POOL)
    @kwarg logger: Logger for warnings. (default: None)
    @return: The pools. Files without any valid map produce no pool.
    @raise PoolLoadError: if the directory cannot be listed.
    """
    logger = logger if logger is not None else NullLogger()

    try:
        names = sorted(os.listdir(directory))
    except OSError as e:
        logger.error("ERROR", LOG_POOL_SCAN_FAIL, directory=directory, error=e)
        raise PoolLoadError(f"cannot scan {directory}: {e}") from e

    pools: List[Pool] = []
    for position, name in enumerate(names):
        if len(pools) >= max_pools:
            logger.warning("POOL", LOG_POOL_TOO_MANY, dropped=len(names) - position)
            break

        location = os.path.join(directory, name)
        try:
            maps = read_pool_file(location, max_maps, logger)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("POOL", LOG_POOL_FILE_FAIL, location=location, error=e)
            continue

        if not maps:
            logger.warning("POOL", LOG_POOL_EMPTY, location=location)
            continue

        pools.append(Pool(name, maps))
        logger.debug("POOL", LOG_POOL_CREATED, name=name, count=len(maps))

    return tuple(pools)


class PoolStore:
    """
    Owns the loaded map pools of a bot and draws random maps from them.
    """
    def __init__(self, directory: str, max_pools: int = MAX_POOLS, max_maps: int = MAX_MAPS_PER_POOL,
                 logger: Any = None, rng: Optional[random.Random] = None):
        """
        Initializes an empty store. Nothing is read until load() is called.
        @arg directory: The pool directory.
        @kwarg max_pools: Maximum number of pools kept. (default: MAX_POOLS)
        @kwarg max_maps: Maximum number of maps per pool. (default: MAX_MAPS_PER_POOL)
        @kwarg logger: A logger instance. If None, NullLogger is used. (default: None)
        @kwarg rng: Random source for draws. (default: a new random.Random)
        @return: None
        """
        self.directory = directory
        self.max_pools = max_pools
        self.max_maps = max_maps
        self.logger: Any = logger if logger is not None else NullLogger()
        self.rng = rng if rng is not None else random.Random()
        self._pools: Tuple[Pool, ...] = ()
        self._reload_lock = threading.Lock()

    @property
    def pools(self) -> Tuple[Pool, ...]:
        """
        The current snapshot. Take it once per operation and work on the local copy.
        """
        return self._pools

    def __len__(self) -> int:
        return len(self._pools)

    @property
    def total_maps(self) -> int:
        return sum(len(pool) for pool in self._pools)

    def load(self) -> int:
        """
        Reads the pool directory and replaces the current pools.
        The old pools stay in place until the new ones are fully built, so a
        failed load leaves the store as it was.
        @return: The number of pools now loaded.
        @raise PoolLoadError: if the directory cannot be listed.
        """
        with self._reload_lock:
            pools = load_pools(self.directory, self.max_pools, self.max_maps, self.logger)
            self._pools = pools

        self.logger.info("POOL", LOG_POOL_LOADED, count=len(pools),
                         maps=sum(len(p) for p in pools), directory=self.directory)
        return len(pools)

    def reload(self) -> int:
        """
        Like load(), but also logs a failure before re-raising it.
        @return: The number of pools now loaded.
        @raise PoolLoadError: if the directory cannot be listed. The previous pools are kept.
        """
        try:
            return self.load()
        except PoolLoadError as e:
            self.logger.error("ERROR", LOG_POOL_RELOAD_FAIL, count=len(self._pools), error=e)
            raise

    def list_pools(self) -> List[str]:
        return [pool.name for pool in self._pools]

    def pick_random(self) -> str:
        """
        Draws one map uniformly from the union of all pools.
        Every map is equally likely, so bigger pools win more often.
        @return: The map name.
        @raise EmptyPoolStoreError: if no pools are loaded.
        """
        pools = self._pools
        total = sum(len(pool) for pool in pools)
        if total == 0:
            raise EmptyPoolStoreError("no map pools loaded")

        choice = self.rng.randrange(total)
        for pool in pools:
            if choice < len(pool):
                return pool.maps[choice]
            choice -= len(pool)

        raise AssertionError("random choice outside of the pools")

    def pick_random_from(self, index: int) -> str:
        """
        Draws one map uniformly from a single pool.
        @arg index: 1-based pool number, as shown by list_pools().
        @return: The map name.
        @raise InvalidPoolIndexError: if index is not between 1 and the number of pools.
        """
        pools = self._pools
        if isinstance(index, bool) or not isinstance(index, int) or not 1 <= index <= len(pools):
            raise InvalidPoolIndexError(index, len(pools))
        return self.rng.choice(pools[index - 1].maps)
