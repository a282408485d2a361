"""Business domains, each split into schemas, repository, service and router"""
