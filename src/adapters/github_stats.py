"""Estadísticas de GitHub (API GraphQL v4).

Requiere token: la API GraphQL de GitHub no admite acceso anónimo.
"""

from __future__ import annotations

import httpx

from adapters.graphql_client import post_graphql
from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.fallbacks import fallback_github_stats
from core.domain.models import GitHubStats
from core.errors import UpstreamError
from core.services.resilience import resilient_fetch

GET_GH_STATS = """
query GetGitHubStats($login: String!) {
  user(login: $login) {
    contributionsCollection {
      totalCommitContributions
    }
    repositoriesContributedTo(
      first: 1
      contributionTypes: [COMMIT, ISSUE, PULL_REQUEST, REPOSITORY]
    ) {
      totalCount
    }
    pullRequests(first: 1) {
      totalCount
    }
    openIssues: issues(states: OPEN) {
      totalCount
    }
    closedIssues: issues(states: CLOSED) {
      totalCount
    }
    repositories(
      first: 100
      ownerAffiliations: OWNER
      orderBy: { direction: DESC, field: STARGAZERS }
    ) {
      totalCount
      nodes {
        name
        stargazerCount
      }
      pageInfo {
        hasNextPage
        endCursor
      }
    }
  }
}
"""


async def fetch_github_stats(
    username: str | None = None,
    *,
    settings: AppSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> GitHubStats:
    settings = settings or AppSettings()
    login = username or settings.github_username

    async def operation() -> GitHubStats:
        if not login:
            raise UpstreamError("GitHub username not configured (GITHUB_USERNAME)")
        if settings.github_token is None or not settings.github_token.get_secret_value():
            raise UpstreamError("GitHub token not configured (GITHUB_TOKEN)")

        headers = {"Authorization": f"Bearer {settings.github_token.get_secret_value()}"}
        async with build_async_client(settings, extra_headers=headers, transport=transport) as client:
            body = await post_graphql(
                client,
                settings.github_api,
                query=GET_GH_STATS,
                variables={"login": login},
                label="GitHub",
            )
        return GitHubStats.model_validate(body)

    return await resilient_fetch(operation, fallback_github_stats, label="GitHub")
