# Bundled step libraries; each module exposes register_steps(registry).
