"""Record query layer.

This module applies filter, sort, group and project operations over
collections loaded from storage, plus add and remove mutations.
"""
