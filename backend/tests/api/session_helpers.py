"""Helpers for driving signed sessions through the test client."""

from httpx import AsyncClient

PASSWORD = "correct-horse-battery"


async def signup(c: AsyncClient, username: str, password: str = PASSWORD, **extra):
    body = {"username": username, "password": password, "phoneNumber": "555-0100", **extra}
    return await c.post("/signup", json=body)


async def login(c: AsyncClient, username: str, password: str = PASSWORD):
    return await c.post("/login", json={"username": username, "password": password})


async def flashes(c: AsyncClient) -> list[dict]:
    """Drain the caller's flash queue through a view that needs no session."""
    resp = await c.get("/login")
    return resp.json()["flashes"]


async def create_portfolio(c: AsyncClient, title: str, **extra):
    body = {"title": title, "description": f"{title} description", **extra}
    return await c.post("/add", json=body)


async def create_job(c: AsyncClient, job_title: str, **extra):
    body = {
        "jobTitle": job_title,
        "companyName": "Acme",
        "jobDescription": f"{job_title} role",
        **extra,
    }
    return await c.post("/add_job", json=body)
