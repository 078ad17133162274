"""Comment Routes — tests for adding, viewing, editing and deleting comments.

Tests cover:
    - Any signed-in account may comment; the reference is appended in order
    - Commenting on an unknown portfolio is 404
    - Only the comment author may edit or delete, not the portfolio author
    - A comment id not belonging to the portfolio is 403 on mutation, 404 on view
    - Delete detaches the reference from the portfolio
"""

import uuid

from tests.api.session_helpers import create_portfolio


async def _comment_ids(c, title: str) -> list[str]:
    portfolio = (await c.get(f"/portfolios/{title}")).json()["portfolio"]
    return [cm["id"] for cm in portfolio["comments"]]


async def test_add_comment(alice, bob):
    await create_portfolio(alice, "Mine")
    resp = await bob.post("/portfolios/Mine/add_comment", json={"comment": "  nice  "})
    assert resp.status_code == 303
    assert resp.headers["location"] == "/portfolios/Mine"

    portfolio = (await alice.get("/portfolios/Mine")).json()["portfolio"]
    assert len(portfolio["commentIds"]) == 1
    assert portfolio["comments"][0]["comment"] == "nice"
    assert portfolio["comments"][0]["author"] == "bob"


async def test_comments_render_in_append_order(alice, bob):
    await create_portfolio(alice, "Mine")
    await bob.post("/portfolios/Mine/add_comment", json={"comment": "one"})
    await alice.post("/portfolios/Mine/add_comment", json={"comment": "two"})
    await bob.post("/portfolios/Mine/add_comment", json={"comment": "three"})
    portfolio = (await alice.get("/portfolios/Mine")).json()["portfolio"]
    assert [c["comment"] for c in portfolio["comments"]] == ["one", "two", "three"]


async def test_comment_on_unknown_portfolio_is_404(alice):
    resp = await alice.post("/portfolios/Nope/add_comment", json={"comment": "hi"})
    assert resp.status_code == 404


async def test_empty_comment_is_rejected(alice):
    await create_portfolio(alice, "Mine")
    resp = await alice.post("/portfolios/Mine/add_comment", json={"comment": "   "})
    assert resp.status_code == 400


async def test_view_comment(alice, bob):
    await create_portfolio(alice, "Mine")
    await bob.post("/portfolios/Mine/add_comment", json={"comment": "nice"})
    [comment_id] = await _comment_ids(alice, "Mine")

    body = (await alice.get(f"/portfolios/Mine/view_comment/{comment_id}")).json()
    assert body["comment"]["comment"] == "nice"
    missing = await alice.get(f"/portfolios/Mine/view_comment/{uuid.uuid4()}")
    assert missing.status_code == 404


async def test_author_edits_comment(alice, bob):
    await create_portfolio(alice, "Mine")
    await bob.post("/portfolios/Mine/add_comment", json={"comment": "nice"})
    [comment_id] = await _comment_ids(bob, "Mine")

    assert (await bob.get(f"/portfolios/Mine/edit_comment/{comment_id}")).status_code == 200
    resp = await bob.patch(f"/portfolios/Mine/{comment_id}", json={"comment": "very nice"})
    assert resp.status_code == 303
    portfolio = (await bob.get("/portfolios/Mine")).json()["portfolio"]
    assert portfolio["comments"][0]["comment"] == "very nice"


async def test_portfolio_author_cannot_edit_others_comment(alice, bob):
    await create_portfolio(alice, "Mine")
    await bob.post("/portfolios/Mine/add_comment", json={"comment": "nice"})
    [comment_id] = await _comment_ids(alice, "Mine")

    resp = await alice.patch(f"/portfolios/Mine/{comment_id}", json={"comment": "edited"})
    assert resp.status_code == 403
    assert (await alice.delete(f"/portfolios/Mine/{comment_id}")).status_code == 403

    portfolio = (await alice.get("/portfolios/Mine")).json()["portfolio"]
    assert portfolio["comments"][0]["comment"] == "nice"


async def test_comment_addressed_through_wrong_portfolio_is_forbidden(alice, bob):
    await create_portfolio(alice, "Mine")
    await create_portfolio(bob, "Theirs")
    await bob.post("/portfolios/Mine/add_comment", json={"comment": "nice"})
    [comment_id] = await _comment_ids(bob, "Mine")

    resp = await bob.patch(f"/portfolios/Theirs/{comment_id}", json={"comment": "moved"})
    assert resp.status_code == 403


async def test_unknown_comment_mutation_is_forbidden(alice):
    await create_portfolio(alice, "Mine")
    resp = await alice.delete(f"/portfolios/Mine/{uuid.uuid4()}")
    assert resp.status_code == 403


async def test_author_deletes_comment_and_reference(alice, bob):
    await create_portfolio(alice, "Mine")
    await bob.post("/portfolios/Mine/add_comment", json={"comment": "first"})
    await alice.post("/portfolios/Mine/add_comment", json={"comment": "second"})
    first_id, second_id = await _comment_ids(alice, "Mine")

    resp = await bob.delete(f"/portfolios/Mine/comment/{first_id}")
    assert resp.status_code == 303

    portfolio = (await alice.get("/portfolios/Mine")).json()["portfolio"]
    assert portfolio["commentIds"] == [second_id]
    assert [c["comment"] for c in portfolio["comments"]] == ["second"]
