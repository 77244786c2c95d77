"""Request utility functions."""

from fastapi import Request


def get_client_ip(request: Request, trust_proxy_headers: bool = False) -> str | None:
    """
    Extract the client IP.

    When trust_proxy_headers is set, checks headers in order:
    1. X-Forwarded-For (may contain chain: "client, proxy1, proxy2")
    2. X-Real-IP (single IP from nginx)
    Otherwise, and as a fallback, uses the direct connection IP.
    """
    if trust_proxy_headers:
        # X-Forwarded-For may contain chain of IPs
        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            # First IP in chain is the original client
            client_ip = forwarded.split(",")[0].strip()
            if client_ip:
                return client_ip

        # X-Real-IP is typically set by nginx
        real_ip = request.headers.get("X-Real-IP")
        if real_ip and real_ip.strip():
            return real_ip.strip()

    if request.client:
        return request.client.host

    return None


def get_user_agent(request: Request) -> str | None:
    return request.headers.get("User-Agent") or None
