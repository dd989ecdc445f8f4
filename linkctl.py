"""Command-line client for the link management API."""
import argparse
import os
import sys
from typing import List, Optional
from urllib.parse import quote

import httpx
from dotenv import dotenv_values

DEFAULT_CONFIG_FILE = "~/.config/brig.gs"
DEFAULT_BASE_URL = "http://brig.gs"


class ClientError(Exception):
    pass


def load_token(config_file: str) -> Optional[str]:
    """Read API_TOKEN from a KEY=VALUE file; a missing file yields None."""
    path = os.path.expanduser(config_file)
    if not os.path.isfile(path):
        return None
    return dotenv_values(path).get("API_TOKEN") or None


class LinkClient:
    def __init__(self, base_url: str, token: Optional[str], transport: Optional[httpx.BaseTransport] = None):
        if not token:
            raise ClientError("no API token set")
        self.http = httpx.Client(
            base_url=base_url.rstrip("/"),
            headers={"Authorization": token},
            transport=transport,
        )

    def close(self):
        self.http.close()

    def list_links(self) -> str:
        resp = self.http.get("/api/list")
        if resp.status_code != 200:
            raise ClientError(f"error listing links: {resp.text}")
        return resp.text

    def get_link(self, short_id: str) -> bool:
        if not short_id:
            raise ClientError("missing short ID")
        resp = self.http.get(f"/{quote(short_id, safe='/')}", follow_redirects=False)
        if resp.status_code in (200, 302):
            return True
        if resp.status_code == 404:
            return False
        raise ClientError(f"unexpected status {resp.status_code}: {resp.text}")

    def add_link(self, short_id: str, target_url: str) -> None:
        if not short_id or not target_url:
            raise ClientError("missing short ID or target URL")
        resp = self.http.post("/api/create", json={"short_id": short_id, "target_url": target_url})
        if resp.status_code != 201:
            raise ClientError(f"error creating link: {resp.text}")

    def delete_link(self, short_id: str) -> None:
        if not short_id:
            raise ClientError("missing short ID")
        resp = self.http.delete(f"/api/delete/{quote(short_id, safe='')}")
        if resp.status_code != 200:
            raise ClientError(f"error deleting link: {resp.text}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="linkctl", description="Manage short links.")
    parser.add_argument("--config-file", default=DEFAULT_CONFIG_FILE, help="file holding an API_TOKEN= line")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL, help="base URL of the URL-shortener service")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="list all links")
    get = sub.add_parser("get", help="check whether a short link exists")
    get.add_argument("short_id")
    add = sub.add_parser("add", help="add a new short link")
    add.add_argument("short_id")
    add.add_argument("target_url")
    delete = sub.add_parser("delete", help="delete a short link")
    delete.add_argument("short_id")
    return parser


def run(args: argparse.Namespace, transport: Optional[httpx.BaseTransport] = None) -> None:
    client = LinkClient(args.base_url, load_token(args.config_file), transport=transport)
    try:
        if args.command == "list":
            print(client.list_links())
        elif args.command == "get":
            if client.get_link(args.short_id):
                print(f"Short ID '{args.short_id}' found.")
            else:
                print(f"Short ID '{args.short_id}' not found.")
        elif args.command == "add":
            client.add_link(args.short_id, args.target_url)
            print("Link created successfully.")
        elif args.command == "delete":
            client.delete_link(args.short_id)
            print(f"Short ID '{args.short_id}' deleted.")
    finally:
        client.close()


def main(argv: Optional[List[str]] = None, transport: Optional[httpx.BaseTransport] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        run(args, transport=transport)
    except (ClientError, httpx.HTTPError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
