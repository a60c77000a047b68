BLOG_POSTS = [
    {
        "slug": "top-10-qa-skills-developers-2026",
        "title": "Top 10 QA Skills Every Developer Should Install in 2026",
        "description": "The definitive ranked list of the best QA testing skills for AI coding agents.",
        "date": "2026-02-11",
    },
    {
        "slug": "tdd-ai-agents-best-practices",
        "title": "TDD with AI Agents - Best Practices for 2026",
        "description": "Test-Driven Development with AI coding agents: Red-Green-Refactor, anti-patterns and CI integration.",
        "date": "2026-02-12",
    },
    {
        "slug": "playwright-e2e-complete-guide",
        "title": "Complete Guide: Setting Up Playwright E2E Testing with AI Skills",
        "description": "Build a production-grade Playwright E2E suite with AI agent skills.",
        "date": "2026-02-13",
    },
    {
        "slug": "how-ai-agents-changing-qa-testing",
        "title": "How AI Agents Are Changing QA Testing in 2026",
        "description": "How AI coding agents are transforming software quality assurance.",
        "date": "2026-02-14",
    },
    {
        "slug": "must-have-qa-skills-claude-code-2026",
        "title": "5 Must-Have QA Skills for Claude Code in 2026",
        "description": "Five essential testing skills that turn a general-purpose agent into a QA powerhouse.",
        "date": "2026-02-15",
    },
    {
        "slug": "api-testing-complete-guide",
        "title": "API Testing Complete Guide - REST, GraphQL, and Contract Testing in 2026",
        "description": "REST, GraphQL and contract testing, schema validation and API performance testing.",
        "date": "2026-02-16",
    },
    {
        "slug": "cypress-vs-playwright-2026",
        "title": "Cypress vs Playwright in 2026 - Which Testing Framework Should Your AI Agent Use?",
        "description": "Architecture, syntax, speed, browser support and AI agent integration compared.",
        "date": "2026-02-16",
    },
    {
        "slug": "fix-flaky-tests-guide",
        "title": "How to Fix Flaky Tests - A Practical Guide for 2026",
        "description": "Root causes of test flakiness, diagnostic techniques and proven fixes for CI pipelines.",
        "date": "2026-02-16",
    },
    {
        "slug": "security-testing-ai-generated-code",
        "title": "Security Testing for AI-Generated Code - OWASP Top 10 Automation Guide",
        "description": "OWASP Top 10 automation, SAST/DAST tools and CI integration for vulnerability detection.",
        "date": "2026-02-16",
    },
    {
        "slug": "shift-left-testing-ai-agents",
        "title": "Shift-Left Testing with AI Agents - Catch Bugs Before They Ship",
        "description": "Catch bugs earlier with TDD, static analysis, pre-commit hooks and CI testing.",
        "date": "2026-02-16",
    },
    {
        "slug": "autonomous-testing-agents-build-vs-buy",
        "title": "Autonomous Testing Agents: Build Your Own vs Buy (2026)",
        "description": "Building your own autonomous testing agent versus buying a commercial platform.",
        "date": "2026-02-19",
    },
    {
        "slug": "mcp-for-qa-engineers-guide",
        "title": "MCP for QA Engineers: The Protocol Powering AI Testing",
        "description": "How Model Context Protocol testing automation works with Playwright and multi-tool workflows.",
        "date": "2026-02-19",
    },
    {
        "slug": "playwright-test-agents-claude-code",
        "title": "Playwright Test Agents + Claude Code: Complete Setup Guide",
        "description": "Planner, generator and healer agents for self-healing test automation.",
        "date": "2026-02-19",
    },
    {
        "slug": "testing-ai-generated-code-sdet-playbook",
        "title": "How to Test AI-Generated Code: An SDET's 2026 Playbook",
        "description": "Contract, property-based and mutation testing for AI generated code.",
        "date": "2026-02-19",
    },
    {
        "slug": "vibe-testing-ai-first-qa-guide",
        "title": "What Is Vibe Testing? The AI-First QA Guide for 2026",
        "description": "Natural language test automation powered by AI, and how it compares to traditional testing.",
        "date": "2026-02-19",
    },
]
