from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from src.adapters.clock import SystemClock
from src.adapters.sqlite_kv import SQLiteKeyValueStore
from src.components import accounts, ads, catalog, entitlement
from src.components.accounts import AccountsConfig, BookmarkStore, SessionUserStore
from src.components.ads import AdThrottle, KeyValueAdTrackerStore
from src.components.catalog import ContentRepository
from src.components.entitlement import EntitlementConfig
from src.components.reading import ReadingSession
from src.ports.clock import ClockPort
from src.ports.kv import KeyValueStorePort
from src.rules.models import Rules

logger = logging.getLogger(__name__)


@dataclass
class ServiceContext:
    rules: Rules
    kv: KeyValueStorePort
    clock: ClockPort
    catalog: ContentRepository
    throttle: AdThrottle
    users: SessionUserStore
    bookmarks: BookmarkStore
    reading: ReadingSession
    entitlement: EntitlementConfig
    accounts: AccountsConfig

    @classmethod
    def create(
        cls,
        rules: Rules,
        kv: KeyValueStorePort,
        clock: ClockPort | None = None,
    ) -> ServiceContext:
        clock = clock or SystemClock()
        raw_rules = rules.model_dump()

        entitlement_config = entitlement.load_config_from_rules(raw_rules)
        ads_config = ads.load_config_from_rules(raw_rules)
        accounts_config = accounts.load_config_from_rules(raw_rules)

        content = ContentRepository(kv, clock, catalog.load_config_from_rules(raw_rules))
        throttle = AdThrottle(KeyValueAdTrackerStore(kv, ads_config.tracker_key), ads_config)
        users = SessionUserStore(kv, accounts_config.auth_key)
        bookmarks = BookmarkStore(kv, accounts_config.bookmarks_key)

        return cls(
            rules=rules,
            kv=kv,
            clock=clock,
            catalog=content,
            throttle=throttle,
            users=users,
            bookmarks=bookmarks,
            reading=ReadingSession(content, throttle, bookmarks, clock, entitlement_config),
            entitlement=entitlement_config,
            accounts=accounts_config,
        )

    @classmethod
    def from_db(cls, db_path: str | Path, rules: Rules) -> ServiceContext:
        logger.info("Opening store at %s", db_path)
        return cls.create(rules, SQLiteKeyValueStore(db_path))

    def reset_all(self) -> None:
        """Factory reset: default catalog and a zeroed ad tracker."""
        self.catalog.reset_data()
        self.throttle.reset_ad_tracker()

    def close(self) -> None:
        self.catalog.dispose()
