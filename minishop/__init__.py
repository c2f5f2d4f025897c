"""minishop: session login, product catalog and per-user cart."""
