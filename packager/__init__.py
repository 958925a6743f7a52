# packager - build artifacts through GitHub Actions in temporary repositories
__version__ = "0.1.0"
