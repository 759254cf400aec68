#!/usr/bin/env python3
"""
Example JSON API served by pathmux.

Run it directly:

    python examples/users_api.py :8080

or through the CLI:

    pathmux serve examples.users_api:create_router --address :8080

Then:

    curl localhost:8080/users/1
    curl localhost:8080/users/1/posts/2
"""

import pathlib
import sys

# Add the project root to the path
project_root = str(pathlib.Path(__file__).resolve().parents[1])
sys.path.append(project_root) if project_root not in sys.path else None

from pathmux import MuxConfig, Request, ResponseWriter, Router, get_param
from pathmux.log import Logger, LoggerFactory

USERS = {
    "1": {"id": "1", "name": "Ada"},
    "7": {"id": "7", "name": "Grace"},
}

POSTS = {
    ("7", "99"): {"id": "99", "title": "Compilers for everyone"},
    ("1", "2"): {"id": "2", "title": "Notes on the analytical engine"},
}


def health(request: Request, writer: ResponseWriter) -> None:
    writer.json({"status": "ok"})


def show_user(request: Request, writer: ResponseWriter) -> None:
    user_id = get_param(request, "id")
    user = USERS.get(user_id)
    if user is None:
        writer.json({"error": "user not found", "id": user_id}, status=404)
        return
    writer.json(user)


def show_user_post(request: Request, writer: ResponseWriter) -> None:
    user_id = get_param(request, "userId")
    post_id = get_param(request, "postId")
    post = POSTS.get((user_id, post_id))
    if post is None:
        writer.json(
            {"error": "post not found", "userId": user_id, "postId": post_id},
            status=404,
        )
        return
    writer.json({"userId": user_id, **post})


def create_user(request: Request, writer: ResponseWriter) -> None:
    writer.json({"created": True, "bytes": len(request.body)}, status=201)


def create_router(config: MuxConfig | None = None, lg: Logger | None = None) -> Router:
    """Build the example router. Used by `pathmux serve`."""
    router = Router.from_config(config, lg) if config is not None else Router(lg)
    router.get("/health", health)
    router.get("/users/:id", show_user)
    router.get("/users/:userId/posts/:postId", show_user_post)
    router.post("/users", create_user)
    return router


router = create_router()


def main() -> int:
    config = MuxConfig.load()
    lg = LoggerFactory.create_root(config.log)
    address = sys.argv[1] if len(sys.argv) > 1 else config.address
    return create_router(config, lg).start(address)


if __name__ == "__main__":
    sys.exit(main())
