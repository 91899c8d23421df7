# Application services
