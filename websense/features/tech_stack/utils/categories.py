from typing import Iterable, List, Tuple

from websense.features.tech_stack.schemas.tech_stack import Technology, TechStackBreakdown

# Ordered: a technology lands in the FIRST bucket whose keywords appear in
# its lowercased name or category. Unmatched technologies are dropped.
BUCKETS: Tuple[Tuple[Tuple[str, ...], Tuple[str, ...]], ...] = (
    (("tech_stack", "frontend"), (
        "react", "vue", "angular", "jquery", "bootstrap", "tailwind", "sass", "less",
        "webpack", "vite", "parcel", "gulp", "grunt", "typescript", "javascript",
        "html5", "css3", "pwa", "service worker", "web components",
    )),
    (("tech_stack", "backend"), (
        "node.js", "express", "django", "flask", "laravel", "spring", "asp.net",
        "php", "python", "java", "c#", "ruby", "rails", "fastapi", "koa",
        "hapi", "sails", "meteor", "strapi", "ghost",
    )),
    (("tech_stack", "databases"), (
        "mysql", "postgresql", "mongodb", "redis", "sqlite", "mariadb",
        "oracle", "sql server", "dynamodb", "firebase", "supabase",
    )),
    (("tech_stack", "programming_languages"), (
        "javascript", "typescript", "python", "php", "java", "c#", "ruby",
        "go", "rust", "swift", "kotlin", "scala", "elixir", "clojure",
    )),
    (("tech_stack", "frameworks"), (
        "react", "vue", "angular", "svelte", "next.js", "nuxt", "gatsby",
        "django", "flask", "express", "laravel", "spring", "asp.net",
        "rails", "fastapi", "koa", "hapi", "sails",
    )),
    (("tech_stack", "libraries"), (
        "jquery", "lodash", "moment", "axios", "fetch", "socket.io",
        "three.js", "d3", "chart.js", "fabric", "konva",
    )),
    (("cms",), (
        "wordpress", "drupal", "joomla", "magento", "shopify", "squarespace",
        "wix", "webflow", "ghost", "strapi", "contentful", "sanity",
    )),
    (("ecommerce",), (
        "shopify", "woocommerce", "magento", "prestashop", "opencart",
        "bigcommerce", "squarespace", "wix", "webflow", "stripe",
        "paypal", "razorpay", "square",
    )),
    (("analytics",), (
        "google analytics", "gtag", "ga", "hotjar", "segment", "mixpanel",
        "amplitude", "heap", "kissmetrics", "crazy egg", "optimizely",
        "google tag manager", "facebook pixel", "twitter pixel",
    )),
    (("devops", "web_servers"), (
        "apache", "nginx", "iis", "lighttpd", "caddy", "traefik",
    )),
    (("devops", "cdn"), (
        "cloudflare", "akamai", "fastly", "aws cloudfront", "azure cdn",
        "google cloud cdn", "bunny cdn", "keycdn", "stackpath",
    )),
    (("devops", "hosting"), (
        "aws", "amazon web services", "azure", "google cloud", "heroku",
        "digitalocean", "linode", "vultr", "netlify", "vercel", "firebase",
        "surge", "github pages", "gitlab pages",
    )),
    (("devops", "cloud_services"), (
        "aws", "azure", "google cloud", "firebase", "supabase", "heroku",
        "vercel", "netlify", "digitalocean", "linode", "vultr",
    )),
    (("security",), (
        "recaptcha", "ssl", "tls", "csp", "hsts", "xss protection",
        "csrf", "security headers", "cloudflare security", "sucuri",
        "incapsula", "akamai security",
    )),
    (("competitor", "payment_processors"), (
        "stripe", "paypal", "razorpay", "square", "adyen", "braintree",
        "worldpay", "sage", "quickbooks", "xero", "freshbooks",
    )),
    (("competitor", "advertising_networks"), (
        "google ads", "facebook ads", "twitter ads", "linkedin ads",
        "amazon ads", "bing ads", "taboola", "outbrain", "adroll",
        "google adwords", "google adsense", "doubleclick",
    )),
    (("competitor", "ab_testing"), (
        "optimizely", "vwo", "google optimize", "ab tasty", "convert",
        "kissmetrics", "mixpanel", "amplitude", "hotjar", "crazy egg",
    )),
)


def find_bucket(tech: Technology) -> Tuple[str, ...] | None:
    name = tech.name.lower()
    category = tech.category.lower()
    for path, keywords in BUCKETS:
        if any(keyword in name or keyword in category for keyword in keywords):
            return path
    return None


def _bucket_list(breakdown: TechStackBreakdown, path: Tuple[str, ...]) -> List[Technology]:
    target = breakdown
    for attr in path:
        target = getattr(target, attr)
    return target


def categorize_technologies(technologies: Iterable[Technology]) -> TechStackBreakdown:
    breakdown = TechStackBreakdown()
    for tech in technologies:
        path = find_bucket(tech)
        if path is not None:
            _bucket_list(breakdown, path).append(tech)
    return breakdown
