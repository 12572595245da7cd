pytest_plugins = ["pytester", "pytest_memoizer.plugin"]
