"""Portfolio Routes — tests for create, read, edit and the one-per-account rule.

Tests cover:
    - Create redirects to the canonical, URL-encoded portfolio view
    - A second portfolio for the same account is 409; the count stays at 1
    - A duplicate title from another account is 409
    - Tags and image slots are truncated to three
    - Edit by a non-author is 403 and leaves the portfolio unchanged
    - Edit of an unknown title is 403, view of an unknown title is 404
    - Index lists every portfolio
"""

from tests.api.session_helpers import create_portfolio, flashes


async def test_create_portfolio_redirects_to_view(alice):
    resp = await create_portfolio(alice, "Alice Works")
    assert resp.status_code == 303
    assert resp.headers["location"] == "/portfolios/Alice%20Works"
    assert await flashes(alice) == [
        {"category": "info", "message": "Portfolio added to your account."},
    ]

    body = (await alice.get("/portfolios/Alice Works")).json()
    assert body["view"] == "view-portfolio"
    assert body["isOwner"] is True
    assert body["portfolio"]["author"] == "alice"
    assert body["portfolio"]["comments"] == []


async def test_second_portfolio_for_same_account_conflicts(alice):
    await create_portfolio(alice, "First")
    resp = await create_portfolio(alice, "Second")
    assert resp.status_code == 409
    assert resp.json()["error"] == "You already have a portfolio."

    listing = (await alice.get("/")).json()["portfolios"]
    assert [p["title"] for p in listing] == ["First"]
    user = (await alice.get("/users/alice")).json()["user"]
    assert user["portfolioExists"] is True


async def test_duplicate_title_from_other_account_conflicts(alice, bob):
    await create_portfolio(alice, "Same")
    resp = await create_portfolio(bob, "Same")
    assert resp.status_code == 409
    assert resp.json()["error"] == "Portfolio already exists."
    assert (await bob.get("/users/bob")).json()["user"]["portfolioExists"] is False


async def test_tags_and_images_are_truncated(alice):
    await create_portfolio(
        alice, "Capped",
        tags="one, two, three, four",
        imageOfOne="1.png", imageOfTwo="", imageOfThree="3.png",
    )
    portfolio = (await alice.get("/portfolios/Capped")).json()["portfolio"]
    assert portfolio["tags"] == ["one", "two", "three"]
    assert portfolio["images"] == ["1.png", "3.png"]


async def test_create_portfolio_validation(alice):
    resp = await alice.post("/add", json={"title": "   ", "description": "d"})
    assert resp.status_code == 400


async def test_edit_portfolio_by_author(alice):
    await create_portfolio(alice, "Draft")
    resp = await alice.patch(
        "/portfolios/Draft/edit", json={"title": "Final", "tags": ["a", "b", "c", "d"]},
    )
    assert resp.status_code == 303
    assert resp.headers["location"] == "/portfolios/Final"
    portfolio = (await alice.get("/portfolios/Final")).json()["portfolio"]
    assert portfolio["tags"] == ["a", "b", "c"]
    assert (await alice.get("/portfolios/Draft")).status_code == 404


async def test_edit_portfolio_by_other_is_forbidden(alice, bob):
    await create_portfolio(alice, "Mine")
    resp = await bob.patch("/portfolios/Mine", json={"description": "defaced"})
    assert resp.status_code == 403
    assert (await bob.get("/portfolios/Mine/edit")).status_code == 403

    portfolio = (await alice.get("/portfolios/Mine")).json()["portfolio"]
    assert portfolio["description"] == "Mine description"


async def test_unknown_portfolio(alice):
    assert (await alice.get("/portfolios/Nope")).status_code == 404
    assert (await alice.patch("/portfolios/Nope", json={"description": "x"})).status_code == 403


async def test_index_lists_all_portfolios(alice, bob):
    await create_portfolio(alice, "A")
    await create_portfolio(bob, "B")
    titles = {p["title"] for p in (await bob.get("/")).json()["portfolios"]}
    assert titles == {"A", "B"}


async def test_title_with_slash_is_rejected(alice):
    resp = await create_portfolio(alice, "UI/UX Work")
    assert resp.status_code == 400
    assert {d["field"] for d in resp.json()["details"]} == {"body.title"}
    assert (await alice.get("/")).json()["portfolios"] == []


async def test_rename_to_title_with_slash_is_rejected(alice):
    await create_portfolio(alice, "UI Work")
    resp = await alice.patch("/portfolios/UI Work/edit", json={"title": "UI/UX Work"})
    assert resp.status_code == 400
    assert (await alice.get("/portfolios/UI Work")).status_code == 200
