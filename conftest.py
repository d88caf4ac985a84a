pytest_plugins = ["pytester", "browserspec.plugin"]
