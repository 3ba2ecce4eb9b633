"""
test_readme.py - README 정규화 테스트

검증:
- 마커 섹션 제거 (대소문자 무시, 여러 개, 중첩 없음)
- 3개 이상 연속 개행 → 2개
- 멱등성
- npm 이외 매니저만 치환, 단어 경계 유지
"""

from src.templates.readme import (
    process_template_readme,
    remove_template_marker_sections,
    rewrite_package_manager_references,
)

# =============================================================================
# remove_template_marker_sections
# =============================================================================


class TestRemoveTemplateMarkerSections:
    """마커 섹션 제거."""

    def test_removes_single_section(self, sample_readme: str):
        result = remove_template_marker_sections(sample_readme)

        assert "StackBlitz" not in result
        assert "ASTRO:REMOVE" not in result
        assert "# Starter" in result
        assert "## Commands" in result

    def test_removes_multiple_sections(self):
        content = (
            "Keep A\n"
            "<!-- ASTRO:REMOVE:START -->drop 1<!-- ASTRO:REMOVE:END -->\n"
            "Keep B\n"
            "<!-- ASTRO:REMOVE:START -->\ndrop 2\n<!-- ASTRO:REMOVE:END -->\n"
            "Keep C\n"
        )

        result = remove_template_marker_sections(content)

        assert "drop" not in result
        assert "Keep A" in result
        assert "Keep B" in result
        assert "Keep C" in result

    def test_case_insensitive_and_whitespace(self):
        """마커 대소문자/공백 무관."""
        content = "a\n<!--astro:remove:start-->x<!--   Astro:Remove:End   -->\nb"

        assert remove_template_marker_sections(content) == "a\n\nb"

    def test_non_greedy(self):
        """START는 가장 가까운 END와 짝."""
        content = (
            "<!-- ASTRO:REMOVE:START -->one<!-- ASTRO:REMOVE:END -->"
            "middle"
            "<!-- ASTRO:REMOVE:START -->two<!-- ASTRO:REMOVE:END -->"
        )

        assert remove_template_marker_sections(content) == "middle"

    def test_no_nesting_support(self):
        """중첩 시 첫 END가 닫음 → 바깥 END는 남음."""
        content = (
            "<!-- ASTRO:REMOVE:START -->a"
            "<!-- ASTRO:REMOVE:START -->b<!-- ASTRO:REMOVE:END -->"
            "c<!-- ASTRO:REMOVE:END -->"
        )

        assert remove_template_marker_sections(content) == "c<!-- ASTRO:REMOVE:END -->"

    def test_unpaired_start_left_alone(self):
        content = "<!-- ASTRO:REMOVE:START -->\nnever closed\n"

        assert remove_template_marker_sections(content) == content

    def test_collapses_newlines(self):
        result = remove_template_marker_sections("a\n\n\n\n\nb\n\n\nc\n\nd")

        assert result == "a\n\nb\n\nc\n\nd"
        assert "\n\n\n" not in result

    def test_idempotent(self, sample_readme: str):
        once = remove_template_marker_sections(sample_readme)

        assert remove_template_marker_sections(once) == once

    def test_no_markers_unchanged(self):
        content = "# Title\n\nBody\n"

        assert remove_template_marker_sections(content) == content


# =============================================================================
# rewrite_package_manager_references
# =============================================================================


class TestRewritePackageManagerReferences:
    """패키지 매니저 치환."""

    def test_npm_is_noop(self):
        content = "npm install\nnpm run dev\n"

        assert rewrite_package_manager_references(content, "npm") == content

    def test_run_command_collapsed(self):
        """npm run dev → pnpm dev."""
        assert rewrite_package_manager_references("npm run dev", "pnpm") == "pnpm dev"

    def test_binary_replaced(self):
        result = rewrite_package_manager_references("run npm install", "pnpm")

        assert "pnpm install" in result

    def test_no_standalone_npm_left(self):
        content = "npm install\nnpm run build\nnpx astro add\n`npm`"

        result = rewrite_package_manager_references(content, "yarn")

        assert result == "yarn install\nyarn build\nnpx astro add\n`yarn`"

    def test_word_boundary(self):
        """pnpm, npmrc 등 부분 일치는 건드리지 않음."""
        content = "pnpm install\nnpmrc\nmynpm\n"

        assert rewrite_package_manager_references(content, "bun") == content


# =============================================================================
# process_template_readme
# =============================================================================


class TestProcessTemplateReadme:
    """마커 제거 + 치환 조합."""

    def test_default_manager_only_strips(self, sample_readme: str):
        assert process_template_readme(sample_readme, "npm") == remove_template_marker_sections(
            sample_readme
        )

    def test_yarn(self, sample_readme: str):
        result = process_template_readme(sample_readme, "yarn")

        assert "StackBlitz" not in result
        assert "`yarn install`" in result
        assert "`yarn dev`" in result
        assert "npm" not in result
        assert "\n\n\n" not in result
