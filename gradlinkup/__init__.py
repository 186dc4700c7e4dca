"""
GradLinkUp
Internship board connecting student candidates with companies.

Architecture:
- PostgreSQL: profiles, companies, internships, applications
- MongoDB GridFS: uploaded resume files
- External identity provider: sign-in and signed tokens
"""

__version__ = "1.0.0"
