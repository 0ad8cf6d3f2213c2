from prometheus_client import Counter, Histogram


# Catalog Metrics
repos_created_total = Counter("marketplace_repos_created_total", "Code repositories created", ["language"])
repo_views_total = Counter("marketplace_repo_views_total", "Repository detail views", ["gated"])

# Search Metrics
searches_total = Counter("marketplace_searches_total", "Catalog searches", ["has_query"])
search_duration = Histogram("marketplace_search_seconds", "Catalog search time")
search_history_failures = Counter("marketplace_search_history_failures_total", "Search history writes that failed")

# Access Metrics
access_grants_total = Counter("marketplace_access_grants_total", "Repository access grants", ["result"])

# Moderation Metrics
content_flagged_total = Counter("marketplace_content_flagged_total", "Reviews and comments flagged", ["kind", "flag"])
votes_total = Counter("marketplace_votes_total", "Comment votes", ["action"])

# Code Check Metrics
code_checks_total = Counter("marketplace_code_checks_total", "AI code quality checks", ["language", "result"])
