"""
ricardo.ch API constants
"""

PROVIDER_SYSTEM_NAME = "Integration.Ricardo"

API_BASE_URL = "https://ws.ricardo.ch/ricardoapi/"
SANDBOX_API_BASE_URL = "https://ws.test.ricardo.ch/ricardoapi/"

SECURITY_SERVICE = "SecurityService.json"
ARTICLES_SERVICE = "ArticlesService.json"
SYSTEM_SERVICE = "SystemService.json"
SEARCH_SERVICE = "SearchService.json"

TOKEN_HEADER = "Token-Credential"

# Article limits
MAX_TITLE_LENGTH = 40
MAX_DESCRIPTION_LENGTH = 8000
MAX_PICTURES = 10

ARTICLE_CONDITION_NEW = 1
PAYMENT_CASH = 1
PAYMENT_BANK_TRANSFER = 2
DELIVERY_PICKUP = 1
DELIVERY_SHIPPING = 2
WARRANTY_NONE = 1
WARRANTY_MANUFACTURER = 2


def base_url(use_sandbox: bool) -> str:
    """API root for the selected environment"""
    return SANDBOX_API_BASE_URL if use_sandbox else API_BASE_URL
