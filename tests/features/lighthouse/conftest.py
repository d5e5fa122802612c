import copy

import pytest

SAMPLE_REPORT = {
    "lighthouseVersion": "12.0.0",
    "categories": {
        "performance": {"score": 0.875},
        "accessibility": {"score": 0.9},
        "best-practices": {"score": 1},
        "seo": {"score": 0.82},
        "pwa": {"score": None},
    },
    "audits": {
        "first-contentful-paint": {"score": 0.9, "displayValue": "1.2 s", "numericValue": 1200},
        "largest-contentful-paint": {"score": 0.8, "displayValue": "2.5 s", "numericValue": 2500},
        "speed-index": {"score": 0.9, "displayValue": "1.8 s", "numericValue": 1800},
        "interactive": {"score": 0.9, "displayValue": "3.0 s", "numericValue": 3000},
        "total-blocking-time": {"score": 0.95, "displayValue": "120 ms"},
        "cumulative-layout-shift": {"score": 1, "displayValue": "0.05"},
        "unused-css-rules": {
            "title": "Reduce unused CSS",
            "description": "Remove dead rules from stylesheets.",
            "score": 0.5,
            "displayValue": "Potential savings of 20 KiB",
        },
        "render-blocking-resources": {
            "title": "Eliminate render-blocking resources",
            "description": "Resources are blocking the first paint.",
            "score": 0.45,
        },
        "dom-size": {
            "title": "Avoid an excessive DOM size",
            "description": "A large DOM increases memory usage.",
            "score": 0.85,
            "displayValue": "900 elements",
        },
        "uses-http2": {"title": "Use HTTP/2", "score": 0.95},
        "network-requests": {"details": {"items": [{}, {}, {}]}},
        "total-byte-weight": {"score": 1, "displayValue": "Total size was 1,024 KiB"},
        "image-elements": {"details": {"items": [{}, {}]}},
        "scripts": {"details": {"items": [{}]}},
        "color-contrast": {
            "title": "Background and foreground colors do not have a sufficient contrast ratio.",
            "description": "Low-contrast text is difficult to read.",
            "score": 0,
        },
        "image-alt": {"title": "Image elements do not have [alt] attributes", "score": 0},
        "meta-description": {"title": "Document does not have a meta description", "score": 0},
        "is-on-https": {"title": "Does not use HTTPS", "score": 0},
        "final-screenshot": {
            "details": {"data": "data:image/jpeg;base64,RklOQUw=", "width": 1350, "height": 940},
        },
    },
}


@pytest.fixture
def lighthouse_report():
    return copy.deepcopy(SAMPLE_REPORT)
