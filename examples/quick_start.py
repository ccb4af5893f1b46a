#!/usr/bin/env python3
# Example usage of embedded_json_db

import os
from embedded_json_db import init

def main() -> None:
    path = "exampleDb.json"
    # Open (create if missing) the backing file; empty content means no tables yet
    db = init(path, create=True, indent=2)

    users = db.model("Users")

    uid = users.insert_one({"name": "probablyarth", "age": 17, "isPro": True})
    print("Inserted:", users.find_by_id(uid))

    # Persist everything in memory (all tables) to the file
    users.commit()

    users.insert_many([
        {"name": "noob", "age": 12, "isPro": False},
        {"name": "small", "isPro": False},
    ])

    print("All users:", users.find_many({}))
    print("Non-pro users:", users.find_many({"isPro": False}))

    users.update_one_by_id(uid, {"age": 18})
    removed = users.delete_one({"name": "small"})
    print("Removed:", removed)

    db.commit()
    print("Saved to", os.path.abspath(path))

if __name__ == "__main__":
    main()
