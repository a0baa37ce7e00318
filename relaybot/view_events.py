#!/usr/bin/env python3
"""
Utility script to view relay events stored in the analytics database.
"""
import argparse
import os
import sys

from tabulate import tabulate

from relaybot.storage.analytics import AnalyticsStore


def view_recent_events(store: AnalyticsStore, limit=20):
    """View the most recent events in the database"""
    events = store.recent(limit)
    if not events:
        print("No events found in the database.")
        return

    table_data = []
    for event in events:
        table_data.append([
            event.id,
            event.timestamp.strftime("%Y-%m-%d %H:%M:%S"),
            event.chat_id if event.chat_id is not None else "",
            event.event_type,
            (event.extra[:30] + '...') if event.extra and len(event.extra) > 30 else (event.extra or '')
        ])

    headers = ["ID", "Timestamp", "Chat ID", "Event Type", "Data"]
    print(tabulate(table_data, headers=headers, tablefmt="pretty"))
    print(f"\nShowing {len(events)} most recent events")


def view_event_stats(store: AnalyticsStore, days=7):
    """View event statistics for the past days"""
    counts, chat_count = store.stats(days)

    print(f"\n=== Event Statistics (Past {days} Days) ===")
    print(f"Total unique chats: {chat_count}")

    print("\nEvent Type Breakdown:")
    if counts:
        print(tabulate(counts, headers=["Event Type", "Count"], tablefmt="pretty"))
    else:
        print("No events recorded in this period.")


def main(argv=None):
    parser = argparse.ArgumentParser(description="View relay analytics events")
    parser.add_argument("--database-url", default=os.environ.get("DATABASE_URL"),
                        help="SQLAlchemy database URL (default: $DATABASE_URL)")
    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    recent_parser = subparsers.add_parser("recent", help="View recent events")
    recent_parser.add_argument("-l", "--limit", type=int, default=20,
                               help="Limit number of events to show (default: 20)")

    stats_parser = subparsers.add_parser("stats", help="View event statistics")
    stats_parser.add_argument("-d", "--days", type=int, default=7,
                              help="Number of days to include in stats (default: 7)")

    args = parser.parse_args(argv)
    if not args.database_url:
        print("No database configured. Set DATABASE_URL or pass --database-url.")
        sys.exit(1)

    store = AnalyticsStore(args.database_url)
    store.create_tables()

    if args.command == "stats":
        view_event_stats(store, args.days)
    else:
        # Default behavior: show recent events
        view_recent_events(store, getattr(args, "limit", 20))


if __name__ == "__main__":
    main()
