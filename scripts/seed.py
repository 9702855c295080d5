"""Seed script: imports sample documents for demo owners via the REST API.

Tokens are minted locally with the server's JWT secret, so this only works
against a development server.

Usage:
    python scripts/seed.py              # uses http://localhost:8000
    python scripts/seed.py http://host  # custom base URL

Environment:
    JWT_SECRET     must match the server (default matches the dev default)
    JWT_ALGORITHM  default HS256
"""

import os
import sys

import httpx
import jwt

BASE_URL = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:8000"
JWT_SECRET = os.environ.get("JWT_SECRET", "dev-secret-change-me-before-deploying")
JWT_ALGORITHM = os.environ.get("JWT_ALGORITHM", "HS256")

OWNERS = [
    {"sub": "alice", "name": "Alice Smith", "email": "alice@example.com"},
    {"sub": "bob", "name": "Bob Jones", "email": "bob@example.com"},
]

DOCUMENTS = [
    {
        "owner": "alice",
        "title": "Getting Started Guide.md",
        "kind": "text",
        "content": "# Getting Started\n\n1. Upload a file\n2. Edit and save\n3. Restore any version",
    },
    {
        "owner": "alice",
        "title": "Q3 Budget.csv",
        "kind": "sheet",
        "content": "item,amount\nhosting,120\ndomains,30\n",
    },
    {
        "owner": "bob",
        "title": "Architecture Notes",
        "kind": "doc",
        "content": "Metadata index for listing, blob store for full documents.",
    },
]


def make_token(owner: dict) -> str:
    return jwt.encode({**owner, "email_verified": True}, JWT_SECRET, algorithm=JWT_ALGORITHM)


def import_document(client: httpx.Client, token: str, doc: dict) -> None:
    resp = client.post(
        f"{BASE_URL}/api/documents/import",
        json={"title": doc["title"], "kind": doc["kind"], "content": doc["content"]},
        headers={"Authorization": f"Bearer {token}"},
    )
    if resp.status_code == 201:
        data = resp.json()
        print(f"  Imported '{doc['title']}' ({data['document']['id']}, {data['sync_status']})")
    elif resp.status_code == 403:
        print(f"  Quota reached for {doc['owner']}, skipping '{doc['title']}'")
    else:
        resp.raise_for_status()


def main() -> None:
    print(f"Seeding against {BASE_URL}\n")

    tokens = {owner["sub"]: make_token(owner) for owner in OWNERS}

    with httpx.Client(timeout=30) as client:
        print("Accounts:")
        for owner in OWNERS:
            resp = client.get(
                f"{BASE_URL}/api/account/",
                headers={"Authorization": f"Bearer {tokens[owner['sub']]}"},
            )
            resp.raise_for_status()
            print(f"  {owner['sub']}: {resp.json()['tier']} tier")

        print("\nDocuments:")
        for doc in DOCUMENTS:
            import_document(client, tokens[doc["owner"]], doc)

    print("\nDone. Tokens for manual testing:")
    for sub, token in tokens.items():
        print(f"  {sub}: {token}")


if __name__ == "__main__":
    main()
