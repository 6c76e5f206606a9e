# Icon names from the VSCode Material Icons extension accepted for plugins.
MATERIAL_ICONS = frozenset({
    "angular",
    "audit",
    "babel",
    "bun",
    "console",
    "css",
    "database",
    "docker",
    "document",
    "eslint",
    "folder-test",
    "git",
    "github",
    "go",
    "graphql",
    "html",
    "http",
    "javascript",
    "jest",
    "json",
    "lighthouse",
    "lock",
    "markdown",
    "nodejs",
    "npm",
    "nx",
    "playwright",
    "prettier",
    "python",
    "react",
    "rust",
    "sass",
    "settings",
    "stylelint",
    "svelte",
    "test-js",
    "test-ts",
    "typescript",
    "vite",
    "vitest",
    "vue",
    "webpack",
    "yaml",
})
