"""General-purpose checks for workloads, images, storage and configuration."""