"""
Train registry: creation of trains and seat-availability queries.

- service.py: TrainRegistry, owner of train records
- router.py: FastAPI endpoints, including booking a seat on a train
- schemas.py: Pydantic models for train payloads
"""
