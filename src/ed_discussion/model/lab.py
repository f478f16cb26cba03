from .base import EdModel


class Lab(EdModel):
    """A lab section of a course; none of its keys are modelled yet"""
