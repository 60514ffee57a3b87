"""Class attendance tracker.

Feature modules (accounts, classes, students, subjects, attendance) with a thin
Flask controller layer on top of service/repository layers. Every storage call
goes through :class:`scope.OwnerScope`, which pins the owning account id.
"""
