"""Example script fetching content from a Drupal site.

Run with:
    DRUPAL_BASE_URL=https://cms.example.com python examples/drupal_example.py
"""
from __future__ import annotations

import asyncio
import logging

from drupal_fetch import DrupalFetch, DrupalJsonApiParams, DrupalMenuItem

logging.basicConfig(level=logging.DEBUG)


def print_menu(items: list[DrupalMenuItem], depth: int = 0) -> None:
    for item in items:
        print(f"{'  ' * depth}- {item.title} ({item.url})")
        print_menu(item.items, depth + 1)


async def main() -> None:
    async with DrupalFetch.from_env() as drupal:
        params = (
            DrupalJsonApiParams()
            .add_filter("status", "1")
            .add_include(["uid", "field_tags"])
            .add_sort("created", "DESC")
            .add_page_limit(5)
        )
        articles = await drupal.get_resource_collection("node--article", {"params": params})
        for article in articles or []:
            print(article.title, "by", article.uid.get("display_name"))

        print_menu(await drupal.get_menu("main"))

        for segments in await drupal.get_static_paths(["node--article", "node--page"]):
            path_data = await drupal.get_path_data("/" + "/".join(segments))
            if path_data is not None:
                print(path_data.resolved, path_data.jsonapi.resource_name if path_data.jsonapi else None)


if __name__ == "__main__":
    asyncio.run(main())
