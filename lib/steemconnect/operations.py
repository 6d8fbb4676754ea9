"""Broadcastable operations.

Every operation self-identifies by name through the :class:`Named` capability;
the broadcaster uses that name, plus the operation's params, to build the
``[name, params]`` pairs the broadcast endpoint expects.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Iterable, Protocol, runtime_checkable

MAX_VOTE_WEIGHT = 10000


@runtime_checkable
class Named(Protocol):
    def set_name(self, name: str) -> Any: ...

    def get_name(self) -> str | None: ...


@dataclass
class Operation:
    name: str | None = None
    params: dict[str, Any] = field(default_factory=dict)

    def set_name(self, name: str) -> Operation:
        self.name = name
        return self

    def get_name(self) -> str | None:
        return self.name

    def to_wire(self) -> list[Any]:
        if not self.name:
            raise ValueError("operation has no name")
        return [self.name, dict(self.params)]


def _dump_json(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def vote(voter: str, author: str, permlink: str, weight: int = MAX_VOTE_WEIGHT) -> Operation:
    weight = int(weight)
    if abs(weight) > MAX_VOTE_WEIGHT:
        raise ValueError(f"vote weight must be between -{MAX_VOTE_WEIGHT} and {MAX_VOTE_WEIGHT}")
    return Operation("vote", {"voter": voter, "author": author, "permlink": permlink, "weight": weight})


def comment(
        *,
        author: str,
        permlink: str,
        body: str,
        parent_author: str = "",
        parent_permlink: str = "",
        title: str = "",
        json_metadata: Any = None,
) -> Operation:
    return Operation(
        "comment",
        {
            "parent_author": parent_author,
            "parent_permlink": parent_permlink,
            "author": author,
            "permlink": permlink,
            "title": title,
            "body": body,
            "json_metadata": _dump_json(json_metadata if json_metadata is not None else {}),
        },
    )


def delete_comment(author: str, permlink: str) -> Operation:
    return Operation("delete_comment", {"author": author, "permlink": permlink})


def comment_options(
        author: str,
        permlink: str,
        *,
        max_accepted_payout: str = "1000000.000 SBD",
        percent_steem_dollars: int = 10000,
        allow_votes: bool = True,
        allow_curation_rewards: bool = True,
        extensions: list[Any] | None = None,
) -> Operation:
    return Operation(
        "comment_options",
        {
            "author": author,
            "permlink": permlink,
            "max_accepted_payout": max_accepted_payout,
            "percent_steem_dollars": int(percent_steem_dollars),
            "allow_votes": allow_votes,
            "allow_curation_rewards": allow_curation_rewards,
            "extensions": list(extensions or []),
        },
    )


def custom_json(
        id: str,
        json_data: Any,
        *,
        required_posting_auths: Iterable[str] = (),
        required_auths: Iterable[str] = (),
) -> Operation:
    return Operation(
        "custom_json",
        {
            "required_auths": list(required_auths),
            "required_posting_auths": list(required_posting_auths),
            "id": id,
            "json": _dump_json(json_data),
        },
    )


def _follow_op(follower: str, following: str, what: list[str]) -> Operation:
    payload = ["follow", {"follower": follower, "following": following, "what": what}]
    return custom_json("follow", payload, required_posting_auths=[follower])


def follow(follower: str, following: str) -> Operation:
    return _follow_op(follower, following, ["blog"])


def unfollow(follower: str, following: str) -> Operation:
    return _follow_op(follower, following, [])


def ignore(follower: str, following: str) -> Operation:
    return _follow_op(follower, following, ["ignore"])


def reblog(account: str, author: str, permlink: str) -> Operation:
    payload = ["reblog", {"account": account, "author": author, "permlink": permlink}]
    return custom_json("follow", payload, required_posting_auths=[account])


def claim_reward_balance(account: str, reward_steem: str, reward_sbd: str, reward_vests: str) -> Operation:
    return Operation(
        "claim_reward_balance",
        {
            "account": account,
            "reward_steem": reward_steem,
            "reward_sbd": reward_sbd,
            "reward_vests": reward_vests,
        },
    )
