from websense.features.lighthouse.services.report_parser import LighthouseReportParser


class TestValidate:
    def test_valid_report(self, lighthouse_report):
        assert LighthouseReportParser.validate(lighthouse_report) is None

    def test_runtime_error_message(self, lighthouse_report):
        lighthouse_report["runtimeError"] = {"code": "NO_FCP", "message": "The page did not paint any content."}
        assert LighthouseReportParser.validate(lighthouse_report) == "The page did not paint any content."

    def test_runtime_error_without_message(self, lighthouse_report):
        lighthouse_report["runtimeError"] = {"code": "UNKNOWN"}
        assert (
            LighthouseReportParser.validate(lighthouse_report)
            == "Failed to analyze website. The site may be down or inaccessible."
        )

    def test_chrome_error_page(self, lighthouse_report):
        lighthouse_report["audits"]["final-screenshot"]["details"]["data"] = "chrome-error://chromewebdata/"
        message = LighthouseReportParser.validate(lighthouse_report)
        assert message.startswith("Website appears to be down or inaccessible.")

    def test_missing_categories(self, lighthouse_report):
        del lighthouse_report["categories"]
        assert (
            LighthouseReportParser.validate(lighthouse_report)
            == "Analysis completed but returned invalid data structure."
        )

    def test_no_category_scores(self, lighthouse_report):
        for category in lighthouse_report["categories"].values():
            category["score"] = None
        assert LighthouseReportParser.validate(lighthouse_report) == (
            "Analysis completed but no valid scores were returned. The site may not be accessible."
        )


class TestParse:
    def test_scores_and_metrics(self, lighthouse_report):
        result = LighthouseReportParser.parse("https://example.com", lighthouse_report)

        assert result.url == "https://example.com"
        assert result.score == 88
        assert result.categories == {
            "performance": 88,
            "accessibility": 90,
            "best-practices": 100,
            "seo": 82,
        }
        assert result.first_contentful_paint == "1.2 s"
        assert result.total_blocking_time == "120 ms"
        assert result.unused_css == "Potential savings of 20 KiB"
        assert result.render_blocking_resources == "N/A"
        assert result.max_potential_fid == "N/A"

    def test_resources(self, lighthouse_report):
        resources = LighthouseReportParser.parse("https://example.com", lighthouse_report).resources

        assert resources.total_requests == 3
        assert resources.total_size == "Total size was 1,024 KiB"
        assert resources.image_count == 2
        assert resources.script_count == 1
        assert resources.stylesheet_count == 0
        assert resources.font_count == 0

    def test_suggestions(self, lighthouse_report):
        suggestions = LighthouseReportParser.parse("https://example.com", lighthouse_report).suggestions

        assert [s.title for s in suggestions] == [
            "Reduce unused CSS",
            "Eliminate render-blocking resources",
            "Avoid an excessive DOM size",
        ]
        assert [s.score for s in suggestions] == [50, 45, 85]
        assert suggestions[1].savings == "Improvement available"
        assert suggestions[2].savings == "900 elements"

    def test_category_issues(self, lighthouse_report):
        result = LighthouseReportParser.parse("https://example.com", lighthouse_report)

        assert [i.title for i in result.accessibility_issues] == [
            "Background and foreground colors do not have a sufficient contrast ratio.",
            "Image elements do not have [alt] attributes",
        ]
        assert all(i.category == "Accessibility" for i in result.accessibility_issues)
        assert [i.title for i in result.seo_issues] == ["Document does not have a meta description"]
        assert [i.title for i in result.best_practices_issues] == ["Does not use HTTPS"]
        assert result.best_practices_issues[0].score == 0

    def test_issue_lists_are_capped(self, lighthouse_report):
        for i in range(15):
            lighthouse_report["audits"][f"aria-check-{i}"] = {"title": f"ARIA {i}", "score": 0}

        result = LighthouseReportParser.parse("https://example.com", lighthouse_report)
        assert len(result.accessibility_issues) == 10

    def test_null_performance_score(self, lighthouse_report):
        lighthouse_report["categories"]["performance"]["score"] = None
        result = LighthouseReportParser.parse("https://example.com", lighthouse_report)

        assert result.score == 0
        assert "performance" not in result.categories

    def test_wire_names(self, lighthouse_report):
        payload = LighthouseReportParser.parse("https://example.com", lighthouse_report).model_dump(by_alias=True)

        assert payload["firstContentfulPaint"] == "1.2 s"
        assert payload["unusedCSS"] == "Potential savings of 20 KiB"
        assert payload["unusedJavaScript"] == "N/A"
        assert payload["maxPotentialFID"] == "N/A"
        assert payload["bestPracticesIssues"][0]["category"] == "Best Practices"
        assert payload["resources"]["totalRequests"] == 3
