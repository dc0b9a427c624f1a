from importlib.metadata import PackageNotFoundError, version


try:
    VERSION = version('interhook')
except PackageNotFoundError:  # ? running from a source checkout
    VERSION = '0.0.0-dev'
