from forma import setupModule

config, logger = setupModule(__name__)
