"""LaTeX toolchain adapters: engine table, runner and artifact lookup."""
